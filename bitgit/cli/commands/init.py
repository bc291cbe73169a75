"""Initialize a new BitGit repository."""

import click
from pathlib import Path
from bitgit.core.repository import Repository
from bitgit.core.errors import RepositoryExists
from bitgit.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
@click.option('-b', '--branch', help='Name of the initial branch')
def init_cmd(path, branch):
    """
    Initialize a new repository.

    Creates a .git directory with the object store, refs, HEAD and an
    empty staging index.

    Examples:
        bitgit init                 # Initialize in current directory
        bitgit init my-project      # Initialize in my-project directory
        bitgit init -b trunk        # Start on branch 'trunk'
    """
    repo_path = Path(path).resolve()
    created = not repo_path.exists()

    try:
        repo = Repository(str(repo_path)).init(branch=branch)
    except RepositoryExists as e:
        click.echo(error(str(e)))
        raise click.Abort()
    except ValueError as e:
        click.echo(error(str(e)))
        raise click.Abort()
    except OSError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()

    if created:
        click.echo(info(f"Created directory {repo_path}"))
    click.echo(success(f"Initialized empty repository in {repo.git_dir}"))
    click.echo(info(f"On branch {repo.refs.get_current_branch()}"))
