# rocksteady_ci/registry.py
"""
Image registry capability and its docker + ECR implementation
"""
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from .aws.ecr_manager import ECRManager
from .errors import ExternalOperationFailure

logger = logging.getLogger(__name__)


class ImageRegistry(ABC):
    """What the build command needs from a registry"""

    @abstractmethod
    def login(self, region: str, access_key_id: str, secret_access_key: str) -> None:
        pass

    @abstractmethod
    def build(self, tags: Sequence[str], build_args: Dict[str, Optional[str]],
              context_dir: str = '.') -> None:
        pass

    @abstractmethod
    def push(self, tag: str) -> None:
        pass


class DockerECRRegistry(ImageRegistry):
    """Logs in with an ECR token, then shells out to docker"""

    def __init__(self, dry_run: bool = False, docker: str = 'docker'):
        self.dry_run = dry_run
        self.docker = docker

    def login(self, region: str, access_key_id: str, secret_access_key: str) -> None:
        """Login to ECR with Docker"""
        logger.info("🔐 Logging into ECR...")

        ecr_mgr = ECRManager(region, access_key_id, secret_access_key, self.dry_run)
        ecr_auth = ecr_mgr.get_authorization_token()

        if self.dry_run:
            logger.info(f"[DRY-RUN] Would docker login to {ecr_auth['registry']}")
            return

        cmd = [
            self.docker, 'login',
            '--username', ecr_auth['username'],
            '--password-stdin',
            ecr_auth['registry']
        ]

        try:
            subprocess.run(
                cmd,
                input=ecr_auth['password'],
                text=True,
                capture_output=True,
                check=True
            )
        except subprocess.CalledProcessError as e:
            logger.error(f"❌ Docker login failed: {e.stderr}")
            raise ExternalOperationFailure('docker login', (e.stderr or '').strip()
                                           or f"exit code {e.returncode}") from e
        except FileNotFoundError as e:
            raise ExternalOperationFailure('docker login', f"{self.docker} not found") from e

        logger.info("✅ Docker login successful")

    def build(self, tags: Sequence[str], build_args: Dict[str, Optional[str]],
              context_dir: str = '.') -> None:
        """Build one image carrying every tag"""
        logger.info("🔨 Building Docker image...")
        for tag in tags:
            logger.info(f"  Tag: {tag}")

        cmd = self.build_command(tags, build_args, context_dir)

        if self.dry_run:
            logger.info(f"[DRY-RUN] Would build Docker image from {context_dir}")
            return

        self._stream('docker build', cmd)
        logger.info(f"✅ Docker image built with {len(tags)} tags")

    def build_command(self, tags: Sequence[str], build_args: Dict[str, Optional[str]],
                      context_dir: str = '.') -> List[str]:
        cmd = [self.docker, 'build']
        for tag in tags:
            cmd.extend(['-t', tag])

        # A build arg without a value makes docker read it from its own environment
        for key, value in build_args.items():
            cmd.extend(['--build-arg', key if value is None else f'{key}={value}'])

        cmd.append(context_dir)
        return cmd

    def push(self, tag: str) -> None:
        """Push one tag"""
        logger.info(f"📤 Pushing image: {tag}")

        if self.dry_run:
            logger.info(f"[DRY-RUN] Would push {tag}")
            return

        self._stream('docker push', [self.docker, 'push', tag])
        logger.info(f"✅ Pushed {tag}")

    def _stream(self, operation: str, cmd: List[str]) -> None:
        """Run a command, streaming its output into the log"""
        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1
            )
        except FileNotFoundError as e:
            raise ExternalOperationFailure(operation, f"{self.docker} not found") from e

        for line in process.stdout:
            line = line.strip()
            if line:
                logger.info(f"  {line}")

        process.wait()

        if process.returncode != 0:
            logger.error(f"❌ {operation} failed with code {process.returncode}")
            raise ExternalOperationFailure(operation, f"exit code {process.returncode}")
