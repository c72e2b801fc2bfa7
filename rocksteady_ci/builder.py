# rocksteady_ci/builder.py
"""
build subcommand - login, build once with every tag, push tags in order
"""
import argparse
import logging
from typing import Callable

from .args import build_parser
from .command import Command
from .config import ConfigSource
from .config_build import BuildContext
from .registry import DockerECRRegistry, ImageRegistry
from .validators import docker_validator

logger = logging.getLogger(__name__)


class BuildCommand(Command):
    """Builds the image in the working directory and pushes it to ECR"""

    name = 'build'

    def __init__(self, registry_factory: Callable[[bool], ImageRegistry] = None,
                 ensure_dependencies: Callable[[], None] = None,
                 context_dir: str = '.'):
        self.registry_factory = registry_factory or (lambda dry_run: DockerECRRegistry(dry_run=dry_run))
        self.ensure_dependencies = ensure_dependencies or (lambda: docker_validator().validate())
        self.context_dir = context_dir

    def create_parser(self):
        return build_parser()

    def execute(self, options: argparse.Namespace, source: ConfigSource) -> None:
        context = BuildContext.from_source(source, self.ensure_dependencies)
        registry = self.registry_factory(options.dry_run)

        logger.info(f"🚀 Building {context.project_name} #{context.build_number} ({context.branch})")
        self.run_steps([
            ("Registry Login", lambda: self._login(registry, context)),
            ("Image Build", lambda: self._build(registry, context)),
            ("Push Tags", lambda: self._push(registry, context)),
        ])
        self._show_build_summary(context, options.dry_run)

    def _login(self, registry: ImageRegistry, context: BuildContext) -> None:
        registry.login(context.aws_region, context.aws_access_key_id, context.aws_secret_access_key)

    def _build(self, registry: ImageRegistry, context: BuildContext) -> None:
        registry.build(context.tags, context.get_build_args(), self.context_dir)

    def _push(self, registry: ImageRegistry, context: BuildContext) -> None:
        for tag in context.tags:
            registry.push(tag)

    def _show_build_summary(self, context: BuildContext, dry_run: bool) -> None:
        verb = "Would push" if dry_run else "Pushed"
        logger.info("=" * 60)
        logger.info(f"✅ {verb} {len(context.tags)} tags to ECR repository {context.ecr_repo}")
        for tag in context.tags:
            logger.info(f"  {tag}")
        logger.info("=" * 60)
