# rocksteady_ci/command.py
"""
Common subcommand capability
"""
import argparse
import logging
import sys
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, Tuple

from .args import SubcommandArgumentParser, usage_text
from .config import ConfigSource
from .errors import MissingConfiguration, RocksteadyError

logger = logging.getLogger(__name__)


class Command(ABC):
    """A subcommand: parse its arguments, run its steps, return an exit code"""

    name: str = None

    @abstractmethod
    def create_parser(self) -> SubcommandArgumentParser:
        pass

    @abstractmethod
    def execute(self, options: argparse.Namespace, source: ConfigSource) -> None:
        """Do the work; raise a RocksteadyError on failure"""
        pass

    def run(self, args: Sequence[str], source: ConfigSource) -> int:
        options = self.create_parser().parse_args(list(args))

        if options.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        try:
            self.execute(options, source)
            return 0

        except MissingConfiguration as e:
            sys.stderr.write(f"{e}\n\n{usage_text()}")
            return e.exit_code

        except RocksteadyError as e:
            logger.error(f"❌ {self.name} failed: {e}")
            sys.stderr.write(f"{e}\n")
            return e.exit_code

    def run_steps(self, steps: List[Tuple[str, Callable[[], None]]]) -> None:
        """Run steps in order; the first failure stops the rest"""
        for step_name, step_func in steps:
            logger.info(f"📋 {step_name}")
            logger.info("-" * 60)
            step_func()
