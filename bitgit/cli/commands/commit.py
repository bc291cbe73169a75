"""Commit command - create a commit from staged changes."""

import click
from bitgit.core.repository import Repository
from bitgit.core.errors import BitGitError
from bitgit.cli.output import success, error, info


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
@click.option('--author', help='Author name and email (format: "Name <email>")')
def commit_cmd(message, author):
    """
    Record the staged files in a new commit.

    The whole staging index becomes the commit's tree. The index is kept
    after committing, so files stay staged for the next commit.

    The author comes from --author, then BITGIT_AUTHOR_NAME/EMAIL, then the
    user.name/user.email config values.

    Examples:
        bitgit commit -m "Initial commit"
        bitgit commit -m "Add feature" --author "Jane <jane@example.com>"
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a git repository"))
        raise click.Abort()

    if not author:
        author = repo.config.get_author()
    if not author:
        click.echo(error("Author identity unknown"))
        click.echo(info("Use 'bitgit config set user.name \"Your Name\"' or pass --author"))
        raise click.Abort()

    try:
        parent = repo.refs.resolve_head()
        commit_hash = repo.commit(message, author)
    except (BitGitError, ValueError, OSError) as e:
        click.echo(error(f"Failed to create commit: {e}"))
        raise click.Abort()

    branch = repo.refs.get_current_branch() or 'detached HEAD'
    label = ' (root commit)' if parent is None else ''
    click.echo(success(f"[{branch}{label} {commit_hash[:7]}] {message.splitlines()[0] if message else ''}"))
    click.echo(info(f"Author: {author}"))
