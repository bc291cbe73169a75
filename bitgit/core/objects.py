"""BitGit objects: blobs, trees and commits."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Dict, Iterable, Optional, Tuple, Type

from .errors import SerializationError, UnknownObjectType
from .hash import frame, hash_payload

MODE_FILE = '100644'
MODE_EXECUTABLE = '100755'
MODE_DIRECTORY = '040000'


def _dump_json(value) -> bytes:
    """Encode a value as compact UTF-8 JSON, keeping key insertion order."""
    try:
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot encode payload: {e}")


def _load_json(data: bytes):
    try:
        return json.loads(data.decode('utf-8'))
    except (UnicodeDecodeError, ValueError) as e:
        raise SerializationError(f"cannot decode payload: {e}")


class GitObject:
    """
    Base class for all BitGit objects.

    Subclasses are frozen dataclasses. The hash is computed once, when the
    instance is created, from the framed payload; since the instance can't be
    mutated afterwards the hash can't go stale.
    """

    type: ClassVar[str] = ''

    def serialize(self) -> bytes:
        """
        Serialize object to its canonical payload.

        Returns:
            bytes: Payload without the envelope header
        """
        raise NotImplementedError

    @classmethod
    def deserialize(cls, data: bytes) -> 'GitObject':
        """
        Build an object from its payload.

        Args:
            data: Payload without the envelope header
        """
        raise NotImplementedError

    def frame(self) -> bytes:
        """Return the envelope: <type> <size>\\0<payload>."""
        return frame(self.type, self.serialize())

    def _seal(self) -> None:
        object.__setattr__(self, 'hash', hash_payload(self.type, self.serialize()))


@dataclass(frozen=True)
class Blob(GitObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    type: ClassVar[str] = 'blob'

    data: bytes = b''
    hash: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))
        self._seal()

    def serialize(self) -> bytes:
        """Blob payload is the raw file content."""
        return self.data

    @classmethod
    def deserialize(cls, data: bytes) -> 'Blob':
        return cls(data)

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


@dataclass(frozen=True)
class TreeEntry:
    """
    Represents a single entry in a tree.

    Each entry contains:
    - mode: File permissions ('100644', '100755' or '040000')
    - name: Single path segment
    - hash: SHA-1 hash of the referenced object
    - type: Object type ('blob' or 'tree')
    """

    mode: str
    name: str
    hash: str
    type: str

    def __post_init__(self):
        if not self.name or '/' in self.name or '\0' in self.name:
            raise ValueError(f"Invalid tree entry name: {self.name!r}")
        if self.type not in ('blob', 'tree'):
            raise ValueError(f"Invalid tree entry type: {self.type!r}")

    def sort_key(self) -> bytes:
        """Entries sort by name, byte-wise."""
        return self.name.encode('utf-8')

    def to_dict(self) -> dict:
        return {'mode': self.mode, 'name': self.name, 'hash': self.hash, 'type': self.type}

    @classmethod
    def from_dict(cls, data: dict) -> 'TreeEntry':
        return cls(
            mode=data['mode'],
            name=data['name'],
            hash=data['hash'],
            type=data['type'],
        )

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"


@dataclass(frozen=True)
class Tree(GitObject):
    """
    Represents directory structure.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories). Entries are always held sorted by name, whatever order
    they were given in, and names are unique.
    """

    type: ClassVar[str] = 'tree'

    entries: Tuple[TreeEntry, ...] = ()
    hash: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        entries = tuple(sorted(self.entries, key=TreeEntry.sort_key))
        for previous, current in zip(entries, entries[1:]):
            if previous.name == current.name:
                raise ValueError(f"Duplicate tree entry name: {current.name!r}")
        object.__setattr__(self, 'entries', entries)
        self._seal()

    def serialize(self) -> bytes:
        """
        Serialize tree to a JSON array.

        Each entry is an object with keys in the fixed order
        mode, name, hash, type. The array is in canonical sort order.

        Returns:
            bytes: Serialized tree data
        """
        return _dump_json([entry.to_dict() for entry in self.entries])

    @classmethod
    def deserialize(cls, data: bytes) -> 'Tree':
        raw = _load_json(data)
        if not isinstance(raw, list):
            raise SerializationError("tree payload must be a JSON array")
        try:
            return cls(tuple(TreeEntry.from_dict(item) for item in raw))
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(f"invalid tree entry: {e}")

    @classmethod
    def from_entries(cls, entries: Iterable[TreeEntry]) -> 'Tree':
        return cls(tuple(entries))

    def get(self, name: str) -> Optional[TreeEntry]:
        """Look up an entry by name."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Tree(hash={self.hash[:7]}, entries={len(self.entries)})"


@dataclass(frozen=True)
class Commit(GitObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of project (tree hash)
    - Parent commit, absent for the first commit of a lineage
    - Author
    - Timestamp
    - Commit message
    """

    type: ClassVar[str] = 'commit'

    tree: str
    parent: Optional[str]
    author: str
    message: str
    timestamp: datetime
    hash: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._seal()

    def serialize(self) -> bytes:
        """
        Serialize commit to a JSON object.

        Keys are in the fixed order tree, parent, author, message, timestamp.
        parent is null for a root commit and timestamp is ISO-8601.

        Returns:
            bytes: Serialized commit data
        """
        return _dump_json({
            'tree': self.tree,
            'parent': self.parent,
            'author': self.author,
            'message': self.message,
            'timestamp': self.timestamp.isoformat(),
        })

    @classmethod
    def deserialize(cls, data: bytes) -> 'Commit':
        raw = _load_json(data)
        if not isinstance(raw, dict):
            raise SerializationError("commit payload must be a JSON object")
        try:
            return cls(
                tree=raw['tree'],
                parent=raw.get('parent') or None,
                author=raw['author'],
                message=raw['message'],
                timestamp=datetime.fromisoformat(raw['timestamp']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(f"invalid commit: {e}")

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hash: Optional[str],
        author: str,
        message: str,
        timestamp: Optional[datetime] = None
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hash: Parent commit hash, None for a root commit
            author: Author name and email (e.g., "Name <email>")
            message: Commit message
            timestamp: Commit time (defaults to now, local timezone)

        Returns:
            Commit: New commit object
        """
        if timestamp is None:
            timestamp = datetime.now().astimezone()

        return cls(
            tree=tree_hash,
            parent=parent_hash,
            author=author,
            message=message,
            timestamp=timestamp,
        )

    @property
    def summary(self) -> str:
        """First line of the message."""
        return self.message.split('\n')[0]

    def __repr__(self) -> str:
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{self.summary[:50]}')"


OBJECT_TYPES: Dict[str, Type[GitObject]] = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}


def parse_object(obj_type: str, payload: bytes) -> GitObject:
    """
    Decode a payload according to its type tag.

    Raises:
        UnknownObjectType: If the tag is not blob, tree or commit
        SerializationError: If the payload can't be decoded
    """
    try:
        cls = OBJECT_TYPES[obj_type]
    except KeyError:
        raise UnknownObjectType(obj_type)
    return cls.deserialize(payload)
