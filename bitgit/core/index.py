"""Index (staging area) implementation."""

import json
import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import FileNotFound, SerializationError
from .objects import Blob, MODE_EXECUTABLE, MODE_FILE
from .store import permission_bits

logger = logging.getLogger(__name__)

INDEX_FILE_MODE = 0o644


@dataclass
class IndexEntry:
    """
    Represents a single entry in the index.

    Stores the path of a staged file relative to the work tree, the hash of
    the blob holding its content, and the stat data captured when it was
    staged.
    """
    path: str           # POSIX path relative to the work tree
    hash: str           # SHA-1 of the staged blob
    mode: str           # '100644' or '100755'
    size: int           # File size in bytes
    mod_time: datetime  # Modification time at staging
    staged: bool = True

    def to_dict(self) -> dict:
        return {
            'path': self.path,
            'hash': self.hash,
            'mode': self.mode,
            'size': self.size,
            'mod_time': self.mod_time.isoformat(),
            'staged': self.staged,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'IndexEntry':
        return cls(
            path=data['path'],
            hash=data['hash'],
            mode=data['mode'],
            size=int(data['size']),
            mod_time=datetime.fromisoformat(data['mod_time']),
            staged=bool(data.get('staged', True)),
        )

    def __repr__(self) -> str:
        return f"IndexEntry({self.mode} {self.hash[:7]} {self.path})"


class Index:
    """
    BitGit index (staging area).

    The index is a JSON array of entries in .git/index listing the files to
    be included in the next commit. It is not cleared by a commit.

    Reads and writes are not locked; update() is the one place where a
    read-modify-write happens.
    """

    def __init__(self, repo):
        """
        Initialize index.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.index_file = repo.index_file

    def read(self) -> List[IndexEntry]:
        """
        Read entries from disk.

        Returns:
            List of entries in stored order; empty if the index is missing or empty
        """
        if not self.index_file.exists():
            return []

        text = self.index_file.read_text(encoding='utf-8').strip()
        if not text:
            return []

        try:
            raw = json.loads(text)
            if not isinstance(raw, list):
                raise ValueError("index must be a JSON array")
            return [IndexEntry.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(f"invalid index file {self.index_file}: {e}")

    def write(self, entries: List[IndexEntry]) -> None:
        """
        Write entries to disk, replacing the index file.

        Args:
            entries: Entries to persist, in order

        Raises:
            SerializationError: If an entry can't be encoded as UTF-8 JSON
        """
        try:
            data = json.dumps([entry.to_dict() for entry in entries],
                              ensure_ascii=False).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise SerializationError(f"cannot encode index: {e}")

        fd, temp_path = tempfile.mkstemp(dir=str(self.index_file.parent), prefix='.index_')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            os.chmod(temp_path, permission_bits(INDEX_FILE_MODE))
            os.replace(temp_path, self.index_file)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.debug("Wrote index with %d entries", len(entries))

    @contextmanager
    def update(self) -> Iterator[List[IndexEntry]]:
        """
        Read the index, yield the entry list for in-place changes, and write
        it back when the block exits without an exception.
        """
        entries = self.read()
        yield entries
        self.write(entries)

    def get(self, path: str) -> Optional[IndexEntry]:
        """Get entry by path."""
        for entry in self.read():
            if entry.path == path:
                return entry
        return None

    def stage(self, filepath) -> IndexEntry:
        """
        Stage a file for commit.

        Stores the file content as a blob and records it in the index,
        replacing any existing entry for the same path.

        Args:
            filepath: Path to file, relative to the work tree or absolute

        Returns:
            IndexEntry: The new entry

        Raises:
            FileNotFound: If the file doesn't exist or isn't a regular file
            ValueError: If the file is outside the work tree or inside .git
            SerializationError: If the path can't be recorded as UTF-8
        """
        file_path = Path(filepath)
        if not file_path.is_absolute():
            file_path = self.repo.work_tree / file_path

        if not file_path.is_file():
            raise FileNotFound(str(filepath))

        rel_path = self.repo.relative_path(file_path)
        try:
            rel_path.encode('utf-8')
        except UnicodeEncodeError as e:
            raise SerializationError(f"path {rel_path!r} is not valid UTF-8: {e}")

        st = file_path.stat()
        blob = Blob.from_file(str(file_path))
        obj_hash = self.repo.write_object(blob)

        mode = MODE_EXECUTABLE if st.st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH) else MODE_FILE
        entry = IndexEntry(
            path=rel_path,
            hash=obj_hash,
            mode=mode,
            size=st.st_size,
            mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            staged=True,
        )

        with self.update() as entries:
            entries[:] = [e for e in entries if e.path != rel_path]
            entries.append(entry)

        logger.debug("Staged %s as %s", rel_path, obj_hash[:7])
        return entry

    def __len__(self) -> int:
        return len(self.read())

    def __repr__(self) -> str:
        return f"Index(path={self.index_file})"
