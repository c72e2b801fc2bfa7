# rocksteady_ci/config_deploy.py
"""
Deploy configuration extending the shared context
"""
from dataclasses import dataclass, field
from typing import Callable, Dict

from .config import ConfigSource, SharedContext, optional_from, resolve

SERVER_VAR = 'ROCKSTEADY_SERVER'
GATEWAY_CLIENT_ID_VAR = 'CF_ACCESSC_ID'
GATEWAY_CLIENT_SECRET_VAR = 'CF_ACCESS_SECRET'

SERVER_ARGUMENT = '<server_url>'
WEBHOOK_PATH = '/webhook'


@dataclass
class DeployContext(SharedContext):
    """Where to announce a finished build and how to get through the gateway"""

    server_url: str
    gateway_client_id: str = ''
    gateway_client_secret: str = field(default='', repr=False)

    REQUIRED = {
        **SharedContext.REQUIRED,
        'server_url': (
            (SERVER_ARGUMENT, SERVER_VAR),
            "Rocksteady server is not set. Pass it as the first argument to deploy "
            "or set ROCKSTEADY_SERVER.",
        ),
    }

    @classmethod
    def from_source(cls, source: ConfigSource, server_url: str = None,
                    ensure_dependencies: Callable[[], None] = None) -> 'DeployContext':
        """
        Resolve in order: shared fields, dependencies, server, gateway credentials.
        A non-empty explicit server_url wins over ROCKSTEADY_SERVER.
        """
        values = cls.resolve_shared(source)
        if ensure_dependencies is not None:
            ensure_dependencies()

        _, message = cls.REQUIRED['server_url']
        values['server_url'] = resolve(
            [(SERVER_ARGUMENT, server_url), (SERVER_VAR, source.get(SERVER_VAR))],
            message,
        )
        values['gateway_client_id'] = optional_from(source, GATEWAY_CLIENT_ID_VAR)
        values['gateway_client_secret'] = optional_from(source, GATEWAY_CLIENT_SECRET_VAR)
        return cls(**values)

    @property
    def webhook_url(self) -> str:
        return f"{self.server_url.rstrip('/')}{WEBHOOK_PATH}"

    def get_gateway_headers(self) -> Dict[str, str]:
        """Access gateway headers, each only when its value is set"""
        headers = {}
        if self.gateway_client_id:
            headers['CF-Access-Client-Id'] = self.gateway_client_id
        if self.gateway_client_secret:
            headers['CF-Access-Client-Secret'] = self.gateway_client_secret
        return headers
