# rocksteady_ci/deployer.py
"""
deploy subcommand - announce a finished build to the Rocksteady server
"""
import argparse
import logging
from typing import Callable

from .args import deploy_parser
from .command import Command
from .config import ConfigSource
from .config_deploy import DeployContext
from .validators import http_client_validator
from .webhook import HttpClient, HttpxClient, build_payload

logger = logging.getLogger(__name__)


class DeployCommand(Command):
    """Sends one webhook POST; no retries"""

    name = 'deploy'

    def __init__(self, client_factory: Callable[[], HttpClient] = None,
                 ensure_dependencies: Callable[[], None] = None):
        self.client_factory = client_factory or HttpxClient
        self.ensure_dependencies = ensure_dependencies or (lambda: http_client_validator().validate())

    def create_parser(self):
        return deploy_parser()

    def execute(self, options: argparse.Namespace, source: ConfigSource) -> None:
        context = DeployContext.from_source(source, options.server_url, self.ensure_dependencies)

        body = build_payload(context.build_number, context.branch, context.project_name)
        headers = {'Content-Type': 'application/json'}
        headers.update(context.get_gateway_headers())

        logger.info(f"🚢 Notifying {context.webhook_url} of {context.project_name} "
                    f"#{context.build_number} ({context.branch})")

        if options.dry_run:
            logger.info(f"[DRY-RUN] Would POST to {context.webhook_url}")
            logger.info(f"[DRY-RUN]   Body: {body}")
            logger.info(f"[DRY-RUN]   Headers: {', '.join(headers)}")
            return

        status = self.client_factory().post(context.webhook_url, body, headers)
        logger.info(f"✅ Webhook accepted (HTTP {status})")
