# rocksteady_ci/__init__.py
"""
Rocksteady CI helper - build/push images to ECR and announce builds
"""

__version__ = "1.0.0"

from .config import ConfigSource, EnvironmentSource, SharedContext, resolve, resolve_from
from .config_build import BuildContext, derive_tags
from .config_deploy import DeployContext
from .errors import (
    ExternalOperationFailure,
    MissingConfiguration,
    MissingDependency,
    RocksteadyError,
    UnknownSubcommand,
)
from .builder import BuildCommand
from .deployer import DeployCommand
from .registry import DockerECRRegistry, ImageRegistry
from .webhook import HttpClient, HttpxClient, build_payload

__all__ = [
    'ConfigSource',
    'EnvironmentSource',
    'SharedContext',
    'resolve',
    'resolve_from',
    'BuildContext',
    'derive_tags',
    'DeployContext',

    'RocksteadyError',
    'MissingConfiguration',
    'MissingDependency',
    'ExternalOperationFailure',
    'UnknownSubcommand',

    'BuildCommand',
    'DeployCommand',
    'ImageRegistry',
    'DockerECRRegistry',
    'HttpClient',
    'HttpxClient',
    'build_payload',
]
