"""Main CLI entry point for BitGit."""

import logging

import click
from colorama import init

from bitgit import __version__
from bitgit.cli.commands import (init_cmd, add_cmd, commit_cmd, log_cmd,
                                 load_object_cmd, config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


@click.group()
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging')
def cli(verbose):
    """BitGit - a minimal content-addressable version control system."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )


cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(load_object_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
