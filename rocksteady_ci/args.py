# rocksteady_ci/args.py
"""
Command line surface - usage text and per-subcommand argument parsers
"""
import argparse

PROG = 'rocksteady-ci'

USAGE = f"""\
Usage: {PROG} <subcommand> [options]

Subcommands:
  build                 Build the image in the current directory, tag it and
                        push every tag to ECR
  deploy [server_url]   Tell the Rocksteady server a new build is available
  help                  Show this message

Options (build, deploy):
  --dry-run             Resolve configuration and show what would happen
  -v, --verbose         Enable verbose logging

Environment (first non-empty wins):
  ROCKSTEADY_PROJECT, CIRCLE_PROJECT_REPONAME       project name
  CIRCLE_BUILD_NUM                                  build number
  CIRCLE_BRANCH                                     branch
  ECR_REPO, ROCKSTEADY_PROJECT,
    CIRCLE_PROJECT_REPONAME                         ECR repository (build)
  ECR_BASE                                          registry host (build)
  ECR_AWS_ACCESS_KEY_ID, AWS_ACCESS_KEY_ID          AWS access key (build)
  ECR_AWS_SECRET_ACCESS_KEY, AWS_SECRET_ACCESS_KEY  AWS secret key (build)
  ECR_AWS_REGION                                    AWS region (build)
  CIRCLE_SHA1                                       commit SHA (build)
  SIDEKIQ_PRO_TOKEN                                 forwarded build arg (build, optional)
  ROCKSTEADY_SERVER                                 server URL (deploy)
  CF_ACCESSC_ID, CF_ACCESS_SECRET                   access gateway credentials (deploy, optional)

Exit codes:
  0 success, 1 build/push/webhook failure or unknown subcommand,
  2 missing configuration, 3 missing dependency
"""

HELP_TOKENS = ('', '-h', '--help', 'help')


def usage_text() -> str:
    return USAGE


class SubcommandArgumentParser:
    """Class-based parser for one subcommand"""

    def __init__(self, name: str, description: str, examples: str = None):
        self.name = name
        self.parser = argparse.ArgumentParser(
            prog=f'{PROG} {name}',
            description=description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=examples
        )
        self._add_common_arguments()

    def _add_common_arguments(self):
        self.parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would happen without calling docker, ECR or the server'
        )
        self.parser.add_argument(
            '--verbose', '-v',
            action='store_true',
            help='Enable verbose logging'
        )

    def add_argument(self, *args, **kwargs):
        """Add custom argument - extensibility point"""
        self.parser.add_argument(*args, **kwargs)

    def parse_args(self, args=None) -> argparse.Namespace:
        return self.parser.parse_args(args)


def build_parser() -> SubcommandArgumentParser:
    return SubcommandArgumentParser(
        'build',
        'Build the Docker image in the current directory, tag it and push every tag to ECR',
        examples=f"""
Examples:
  {PROG} build                 # Build, tag and push
  {PROG} build --dry-run       # Show the tags that would be pushed
"""
    )


def deploy_parser() -> SubcommandArgumentParser:
    parser = SubcommandArgumentParser(
        'deploy',
        'Notify the Rocksteady server that a new build is available',
        examples=f"""
Examples:
  {PROG} deploy https://rocksteady.example.com   # Explicit server
  {PROG} deploy                                  # Server from ROCKSTEADY_SERVER
"""
    )
    parser.add_argument(
        'server_url',
        nargs='?',
        default=None,
        help='Rocksteady server URL (default: $ROCKSTEADY_SERVER)'
    )
    return parser
