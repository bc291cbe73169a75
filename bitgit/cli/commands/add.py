"""Add command - stage files for commit."""

import click
from pathlib import Path
from bitgit.core.repository import Repository
from bitgit.core.errors import BitGitError
from bitgit.cli.output import success, error, info


def expand_paths(repo, paths):
    """Resolve command-line paths to files, walking directories and skipping .git."""
    for path_arg in paths:
        path = Path(path_arg)
        if not path.is_absolute():
            path = Path.cwd() / path

        if path.is_dir():
            for file_path in sorted(path.rglob('*')):
                if file_path.is_file() and repo.git_dir not in file_path.resolve().parents:
                    yield path_arg, file_path
        else:
            yield path_arg, path


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Modified files must be added again to stage the new content.

    Examples:
        bitgit add file.txt
        bitgit add src/
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a git repository"))
        raise click.Abort()

    added_files = []
    failed_files = []

    for path_arg, file_path in expand_paths(repo, paths):
        try:
            entry = repo.add(file_path)
            added_files.append(entry.path)
        except (BitGitError, ValueError, OSError) as e:
            failed_files.append((path_arg, str(e)))

    if added_files:
        click.echo(success(f"Added {len(added_files)} file(s) to staging area"))
        for file in added_files:
            click.echo(info(f"  {file}"))

    if failed_files:
        click.echo(error(f"Failed to add {len(failed_files)} file(s):"))
        for file, reason in failed_files:
            click.echo(error(f"  {file}: {reason}"))
        raise click.Abort()
