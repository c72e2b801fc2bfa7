#!/usr/bin/env python3
# rocksteady_ci/cli.py
"""
CLI entry point - dispatches the first argument to a subcommand
"""
import logging
import sys
from typing import Callable, Dict, Optional, Sequence

from .args import HELP_TOKENS, usage_text
from .builder import BuildCommand
from .command import Command
from .config import ConfigSource, EnvironmentSource, load_env_file
from .deployer import DeployCommand
from .errors import UnknownSubcommand

logger = logging.getLogger(__name__)

COMMANDS: Dict[str, Callable[[], Command]] = {
    'build': BuildCommand,
    'deploy': DeployCommand,
}


def dispatch(argv: Sequence[str], source: Optional[ConfigSource] = None,
             commands: Dict[str, Callable[[], Command]] = None) -> int:
    """
    Run the subcommand named by argv[0] and return its exit code.

    Help never reads the environment. When no source is given, a .env file
    in the working directory is loaded before the process environment is used.
    """
    commands = COMMANDS if commands is None else commands
    name = argv[0] if argv else ''

    if name in HELP_TOKENS:
        sys.stdout.write(usage_text())
        return 0

    command_factory = commands.get(name)
    if command_factory is None:
        error = UnknownSubcommand(name)
        sys.stderr.write(f"{error}\n")
        return error.exit_code

    if source is None:
        load_env_file()
        source = EnvironmentSource()

    return command_factory().run(argv[1:], source)


def main(argv: Sequence[str] = None) -> int:
    """Main entry point"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    return dispatch(sys.argv[1:] if argv is None else list(argv))


def run() -> None:
    sys.exit(main())


if __name__ == '__main__':
    run()
