# rocksteady_ci/validators.py
"""
Dependency validators
Single Responsibility: each validator checks one external collaborator
"""
import importlib.util
import logging
import shutil

from .errors import MissingDependency

logger = logging.getLogger(__name__)


class ExecutableValidator:
    """Validates that a command-line tool is on PATH"""

    def __init__(self, executable: str, hint: str = None):
        self.executable = executable
        self.hint = hint

    def validate(self) -> str:
        """Return the resolved path, raise MissingDependency otherwise"""
        path = shutil.which(self.executable)
        if path is None:
            message = f"{self.executable} is required but was not found on PATH."
            if self.hint:
                message = f"{message} {self.hint}"
            raise MissingDependency(self.executable, message)

        logger.debug(f"Found {self.executable} at {path}")
        return path


class ModuleValidator:
    """Validates that a Python library can be imported"""

    def __init__(self, module: str, distribution: str = None):
        self.module = module
        self.distribution = distribution or module

    def validate(self) -> None:
        if importlib.util.find_spec(self.module) is None:
            raise MissingDependency(
                self.distribution,
                f"{self.distribution} is required but is not installed. "
                f"Install it with: pip install {self.distribution}"
            )
        logger.debug(f"Found Python module {self.module}")


def docker_validator() -> ExecutableValidator:
    return ExecutableValidator('docker', 'Install Docker to build and push images.')


def http_client_validator() -> ModuleValidator:
    return ModuleValidator('httpx')
