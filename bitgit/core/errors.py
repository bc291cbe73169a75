"""
Error types for BitGit repository operations.

Core components raise these to their caller; only the CLI turns them into
user-facing messages. Generic filesystem failures surface as the built-in
OSError.
"""

from typing import Optional


class BitGitError(Exception):
    """Base exception for all BitGit errors."""
    pass


class NotARepository(BitGitError):
    """Raised when no .git directory is found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class RepositoryExists(BitGitError):
    """Raised when initializing over an existing repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Repository already exists at {path}")


class ObjectNotFound(BitGitError):
    """Raised when a requested object does not exist in the store."""

    def __init__(self, object_hash: str):
        self.object_hash = object_hash
        super().__init__(f"Object not found: {object_hash}")


class InvalidObjectFormat(BitGitError):
    """Raised when a stored object's envelope or header is malformed."""

    def __init__(self, reason: str, object_hash: Optional[str] = None):
        self.reason = reason
        self.object_hash = object_hash
        msg = f"Invalid object format: {reason}"
        if object_hash:
            msg += f" (hash: {object_hash})"
        super().__init__(msg)


class UnknownObjectType(InvalidObjectFormat):
    """Raised when an object's type tag is not blob, tree or commit."""

    def __init__(self, object_type: str, object_hash: Optional[str] = None):
        self.object_type = object_type
        super().__init__(f"unknown object type '{object_type}'", object_hash)


class SerializationError(BitGitError):
    """Raised when an object or index payload cannot be encoded or decoded."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Serialization error: {reason}")


class FileNotFound(BitGitError):
    """Raised when a working-tree path is missing during staging."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")
