"""Integration tests for the init command."""

from click.testing import CliRunner
from bitgit.cli.main import cli


def test_init_creates_git_directory(temp_dir):
    runner = CliRunner()
    result = runner.invoke(cli, ['init', str(temp_dir)])

    assert result.exit_code == 0
    assert 'Initialized empty repository' in result.output
    git_dir = temp_dir / '.git'
    assert (git_dir / 'objects').is_dir()
    assert (git_dir / 'refs' / 'heads').is_dir()
    assert (git_dir / 'HEAD').read_text() == 'ref: refs/heads/main\n'
    assert (git_dir / 'index').read_text() == '[]'


def test_init_current_directory(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, ['init'])
    assert result.exit_code == 0
    assert (temp_dir / '.git').is_dir()


def test_init_with_branch(temp_dir):
    result = CliRunner().invoke(cli, ['init', str(temp_dir), '-b', 'trunk'])
    assert result.exit_code == 0
    assert 'On branch trunk' in result.output
    assert (temp_dir / '.git' / 'HEAD').read_text() == 'ref: refs/heads/trunk\n'


def test_init_twice_fails(temp_dir):
    runner = CliRunner()
    runner.invoke(cli, ['init', str(temp_dir)])
    result = runner.invoke(cli, ['init', str(temp_dir)])

    assert result.exit_code != 0
    assert 'already exists' in result.output


def test_init_creates_missing_directory(temp_dir):
    target = temp_dir / 'new-project'
    result = CliRunner().invoke(cli, ['init', str(target)])
    assert result.exit_code == 0
    assert 'Created directory' in result.output
    assert (target / '.git').is_dir()


def test_init_rejects_invalid_branch(temp_dir):
    victim = temp_dir / 'victim.txt'
    victim.write_text('precious')

    result = CliRunner().invoke(cli, ['init', str(temp_dir), '-b', '../../../victim.txt'])

    assert result.exit_code != 0
    assert 'invalid branch name' in result.output
    assert not (temp_dir / '.git').exists()
    assert victim.read_text() == 'precious'
