"""Log command - show commit history."""

import click
from colorama import Fore, Style
from bitgit.core.repository import Repository
from bitgit.core.errors import BitGitError
from bitgit.cli.output import error, info, short_hash


def format_timestamp(timestamp):
    """Format a commit timestamp like git log does."""
    return timestamp.strftime("%a %b %d %H:%M:%S %Y %z")


@click.command('log')
@click.option('-n', '--max-count', 'limit', type=int, default=None, help='Limit the number of commits')
@click.option('--oneline', is_flag=True, help='Show one line per commit')
def log_cmd(limit, oneline):
    """
    Show commit history of the current branch, newest first.

    Examples:
        bitgit log
        bitgit log -n 5
        bitgit log --oneline
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a git repository"))
        raise click.Abort()

    shown = 0
    try:
        for commit in repo.log(limit):
            shown += 1
            if oneline:
                click.echo(f"{short_hash(commit.hash)} {commit.summary}")
                continue

            click.echo(f"{Fore.YELLOW}commit {commit.hash}{Style.RESET_ALL}")
            click.echo(f"Author: {commit.author}")
            click.echo(f"Date:   {format_timestamp(commit.timestamp)}")
            click.echo()
            for line in commit.message.splitlines() or ['']:
                click.echo(f"    {line}")
            click.echo()
    except BitGitError as e:
        click.echo(error(f"Failed to read history: {e}"))
        raise click.Abort()

    if not shown:
        branch = repo.refs.get_current_branch() or 'HEAD'
        click.echo(info(f"No commits yet on {branch}"))
