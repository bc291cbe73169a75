"""Core functionality for BitGit.

This module contains the core data structures:
- Objects (Blob, Tree, Commit) and their hashing
- The loose object store
- Index/staging area and the tree builder
- Reference management
- Repository facade
- Configuration and errors
"""

from bitgit.core.objects import GitObject, Blob, Tree, TreeEntry, Commit, OBJECT_TYPES, parse_object
from bitgit.core.repository import Repository
from bitgit.core.hash import frame, hash_object, hash_payload
from bitgit.core.store import ObjectStore
from bitgit.core.index import Index, IndexEntry
from bitgit.core.tree_builder import DirNode, create_tree_from_index
from bitgit.core.refs import RefManager
from bitgit.core.config import Config, get_config
from bitgit.core.errors import (
    BitGitError,
    NotARepository,
    RepositoryExists,
    ObjectNotFound,
    InvalidObjectFormat,
    UnknownObjectType,
    SerializationError,
    FileNotFound,
)

__all__ = [
    'GitObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'OBJECT_TYPES',
    'parse_object',
    'Repository',
    'ObjectStore',
    'Index',
    'IndexEntry',
    'DirNode',
    'create_tree_from_index',
    'RefManager',
    'Config',
    'get_config',
    'frame',
    'hash_object',
    'hash_payload',
    'BitGitError',
    'NotARepository',
    'RepositoryExists',
    'ObjectNotFound',
    'InvalidObjectFormat',
    'UnknownObjectType',
    'SerializationError',
    'FileNotFound',
]
