"""CLI commands for BitGit."""

from bitgit.cli.commands.init import init_cmd
from bitgit.cli.commands.add import add_cmd
from bitgit.cli.commands.commit import commit_cmd
from bitgit.cli.commands.log import log_cmd
from bitgit.cli.commands.load_object import load_object_cmd
from bitgit.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'log_cmd', 'load_object_cmd', 'config_cmd']
