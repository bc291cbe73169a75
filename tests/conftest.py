"""Shared pytest fixtures for BitGit tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from bitgit.core.repository import Repository
from bitgit.core.objects import Blob, Tree, TreeEntry, Commit
from bitgit.core.config import Config

AUTHOR = "Test User <test@example.com>"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the real ~/.bitgitconfig and author env vars."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.bitgitconfig')
    for var in ('BITGIT_AUTHOR_NAME', 'BITGIT_AUTHOR_EMAIL', 'GIT_AUTHOR_NAME',
                'GIT_AUTHOR_EMAIL', 'BITGIT_USER_NAME', 'BITGIT_USER_EMAIL',
                'BITGIT_INIT_DEFAULTBRANCH'):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(str(temp_dir)).init()


@pytest.fixture
def repo_with_config(repo):
    """Create a repository with user identity set."""
    repo.config.set('user', 'name', 'Test User')
    repo.config.set('user', 'email', 'test@example.com')
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_tree(repo, sample_blob):
    """Create a sample tree with one blob."""
    blob_hash = repo.write_object(sample_blob)
    return Tree((TreeEntry('100644', 'test.txt', blob_hash, 'blob'),))


@pytest.fixture
def sample_commit(sample_tree, repo):
    """Sample root commit object."""
    tree_hash = repo.write_object(sample_tree)
    return Commit.create(
        tree_hash=tree_hash,
        parent_hash=None,
        author=AUTHOR,
        message="Test commit"
    )


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "test1.txt"
    file2 = repo.work_tree / "test2.txt"

    (repo.work_tree / "subdir").mkdir()
    file3 = repo.work_tree / "subdir" / "test3.txt"

    file1.write_text("Content 1")
    file2.write_text("Content 2")
    file3.write_text("Content 3")

    return {
        'file1': file1,
        'file2': file2,
        'file3': file3
    }


@pytest.fixture
def repo_with_commits(repo_with_config):
    """Repository with two commits on main."""
    repo = repo_with_config

    file1 = repo.work_tree / "file1.txt"
    file1.write_text("Hello, World!")
    repo.add("file1.txt")
    repo.commit("First commit", AUTHOR)

    file2 = repo.work_tree / "file2.txt"
    file2.write_text("Second file")
    repo.add("file2.txt")
    repo.commit("Second commit", AUTHOR)

    return repo
