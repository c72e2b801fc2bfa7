# rocksteady_ci/errors.py
"""
Error taxonomy - every failure carries the process exit code it maps to
"""
from typing import Sequence


class RocksteadyError(Exception):
    """Base for all rocksteady-ci errors"""

    exit_code = 1


class MissingConfiguration(RocksteadyError):
    """A required value was empty across its whole fallback chain"""

    exit_code = 2

    def __init__(self, names: Sequence[str], message: str = None):
        self.names = tuple(names)
        if message is None:
            message = f"Missing configuration: set {_join_names(self.names)}"
        super().__init__(message)


class MissingDependency(RocksteadyError):
    """A required external tool or library is not available"""

    exit_code = 3

    def __init__(self, dependency: str, message: str = None):
        self.dependency = dependency
        super().__init__(message or f"{dependency} is required but was not found")


class ExternalOperationFailure(RocksteadyError):
    """Registry login, image build, push or webhook call failed"""

    exit_code = 1

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")


class UnknownSubcommand(RocksteadyError):
    """First argument does not name a subcommand"""

    exit_code = 1

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is not a known subcommand. Run 'help' to list subcommands.")


def _join_names(names: Sequence[str]) -> str:
    if len(names) == 1:
        return names[0]
    return f"one of {', '.join(names[:-1])} or {names[-1]}"
