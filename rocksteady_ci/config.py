# rocksteady_ci/config.py
"""
Configuration resolution shared by every subcommand

The process environment is only ever read through a ConfigSource, so
everything here can be exercised with a plain dict.
"""
import collections.abc
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from dotenv import load_dotenv

from .errors import MissingConfiguration

logger = logging.getLogger(__name__)

ConfigSource = Mapping[str, Optional[str]]

# Fallback chains, highest priority first
PROJECT_NAME_VARS = ('ROCKSTEADY_PROJECT', 'CIRCLE_PROJECT_REPONAME')
BUILD_NUMBER_VARS = ('CIRCLE_BUILD_NUM',)
BRANCH_VARS = ('CIRCLE_BRANCH',)


class EnvironmentSource(collections.abc.Mapping):
    """Live read-only view of os.environ"""

    def __getitem__(self, name: str) -> str:
        return os.environ[name]

    def __iter__(self) -> Iterator[str]:
        return iter(os.environ)

    def __len__(self) -> int:
        return len(os.environ)


def load_env_file(env_file: Path = None) -> bool:
    """
    Load a .env file without overriding variables the CI already set.
    Returns True when a file was loaded.
    """
    env_file = env_file or Path('.env')
    if not env_file.exists():
        logger.debug(f"No env file at {env_file}")
        return False

    load_dotenv(env_file, override=False)
    logger.info(f"✅ Loaded environment from {env_file}")
    return True


def resolve(candidates: Iterable[Tuple[str, Optional[str]]], message: str = None) -> str:
    """
    Return the first non-empty value of an ordered (name, value) sequence.

    Raises MissingConfiguration naming every candidate when none has a value.
    Whitespace-only values count as empty.
    """
    names = []
    for name, value in candidates:
        names.append(name)
        if value is not None and value.strip():
            return value
    raise MissingConfiguration(names, message)


def resolve_from(source: ConfigSource, names: Sequence[str], message: str = None) -> str:
    """Resolve a fallback chain of variable names against a source"""
    return resolve(((name, source.get(name)) for name in names), message)


def optional_from(source: ConfigSource, name: str) -> str:
    """Read an optional variable, normalising absence to an empty string"""
    value = source.get(name)
    return value.strip() if value else ''


@dataclass
class SharedContext:
    """Build metadata every subcommand needs"""

    project_name: str
    build_number: str
    branch: str

    # attribute -> (fallback chain, message when missing)
    REQUIRED = {
        'project_name': (
            PROJECT_NAME_VARS,
            "Project name is not set. Set ROCKSTEADY_PROJECT "
            "(CircleCI provides CIRCLE_PROJECT_REPONAME automatically).",
        ),
        'build_number': (
            BUILD_NUMBER_VARS,
            "Build number is not set. Set CIRCLE_BUILD_NUM to the CI build number.",
        ),
        'branch': (
            BRANCH_VARS,
            "Branch is not set. Set CIRCLE_BRANCH to the branch being built.",
        ),
    }

    def __post_init__(self):
        for item in fields(self):
            rule = self.REQUIRED.get(item.name)
            if rule is None:
                continue
            value = getattr(self, item.name)
            if value is None or not str(value).strip():
                names, message = rule
                raise MissingConfiguration(names, message)

    @classmethod
    def resolve_shared(cls, source: ConfigSource) -> dict:
        """Resolve the shared fields in order, stopping at the first missing one"""
        return {
            name: resolve_from(source, *cls.REQUIRED[name])
            for name in ('project_name', 'build_number', 'branch')
        }

    @classmethod
    def from_source(cls, source: ConfigSource) -> 'SharedContext':
        return cls(**cls.resolve_shared(source))
