"""Config command - manage repository configuration."""

import click
from bitgit.core.repository import Repository
from bitgit.core.config import Config
from bitgit.cli.output import success, error, info


def split_key(key):
    """Split 'section.key' into its parts; a bare key belongs to 'core'."""
    return tuple(key.split('.', 1)) if '.' in key else ('core', key)


def load_config(is_global):
    if is_global:
        return Config()
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a git repository (use --global for global config)"))
        raise click.Abort()
    return repo.config


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        bitgit config set user.name "Your Name"
        bitgit config set --global user.email "you@example.com"
    """
    config = load_config(is_global)
    section, option = split_key(key)
    config.set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
def config_get(key):
    """
    Get the effective value of a config key.

    Examples:
        bitgit config get user.name
    """
    repo = Repository.find_repository()
    config = repo.config if repo else Config()

    value = config.get(*split_key(key))
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset in global config')
def config_unset(key, is_global):
    """Remove a config value."""
    config = load_config(is_global)
    section, option = split_key(key)

    if not config.unset(section, option, global_config=is_global):
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(success(f"Unset {key}"))


@config_cmd.command('list')
def config_list():
    """List effective config values."""
    repo = Repository.find_repository()
    config = repo.config if repo else Config()

    values = config.list_all()
    if not values:
        click.echo(info("No configuration set"))
        return

    for section, items in values.items():
        for key, value in items.items():
            click.echo(f"{section}.{key}={value}")
