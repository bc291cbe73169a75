"""BitGit - a content-addressable object store and commit engine."""

__version__ = '0.1.0'

from bitgit.core.repository import Repository
from bitgit.core.objects import GitObject, Blob, Tree, Commit

__all__ = [
    'Repository',
    'GitObject',
    'Blob',
    'Tree',
    'Commit',
]
