"""Load-object command - decode and print a stored object."""

import click
from bitgit.core.repository import Repository
from bitgit.core.objects import Blob, Tree, Commit
from bitgit.core.errors import BitGitError
from bitgit.cli.output import error, short_hash


@click.command('load-object')
@click.argument('object_hash')
def load_object_cmd(object_hash):
    """
    Show the type, size and content of a stored object.

    Examples:
        bitgit load-object 4b825dc642cb6eb9a060e54bf8d69288fbee4904
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a git repository"))
        raise click.Abort()

    try:
        obj = repo.read_object(object_hash)
    except BitGitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(f"type: {obj.type}")
    click.echo(f"size: {len(obj.serialize())}")
    click.echo()

    if isinstance(obj, Blob):
        click.echo(obj.data.decode('utf-8', errors='replace'), nl=False)
    elif isinstance(obj, Tree):
        for entry in obj.entries:
            click.echo(f"{entry.mode} {entry.type} {short_hash(entry.hash)}    {entry.name}")
    elif isinstance(obj, Commit):
        click.echo(f"tree {obj.tree}")
        if obj.parent:
            click.echo(f"parent {obj.parent}")
        click.echo(f"author {obj.author}")
        click.echo(f"date {obj.timestamp.isoformat()}")
        click.echo()
        click.echo(obj.message)
