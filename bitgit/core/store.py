"""
Loose object store.

Objects live under ``.git/objects/<id[0:2]>/<id[2:]>`` as zlib-compressed
envelopes. The store is append-only: writing the same object twice is a
no-op, and identical content always maps to the same path.
"""

import logging
import os
import tempfile
import zlib
from pathlib import Path

from .errors import InvalidObjectFormat, ObjectNotFound
from .objects import GitObject, parse_object

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset('0123456789abcdef')
_CHUNK_SIZE = 64 * 1024

# Loose objects are read-only once written
OBJECT_FILE_MODE = 0o444


def permission_bits(mode: int) -> int:
    """Apply the process umask to a file mode, as a plain open() would."""
    umask = os.umask(0)
    os.umask(umask)
    return mode & ~umask


class ObjectStore:
    """
    Content-addressed storage for blobs, trees and commits.

    Each object is written once, compressed, under a two-character fan-out
    directory taken from the start of its hash.
    """

    def __init__(self, objects_dir: Path):
        """
        Initialize object store.

        Args:
            objects_dir: Path to the .git/objects directory
        """
        self.objects_dir = Path(objects_dir)

    def path(self, obj_hash: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for hash abcdef0123456789...

        Args:
            obj_hash: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.objects_dir / obj_hash[:2] / obj_hash[2:]

    def exists(self, obj_hash: str) -> bool:
        """Check if object exists in the store."""
        return self._is_identifier(obj_hash) and self.path(obj_hash).is_file()

    def store(self, obj: GitObject) -> str:
        """
        Write object to the store.

        The envelope is streamed through a zlib compressor into a temp file
        next to the final path and renamed into place, so a reader never sees
        a partially written object.

        Args:
            obj: Object to write

        Returns:
            str: SHA-1 hash of the object

        Raises:
            SerializationError: If the payload can't be encoded
            OSError: On filesystem failure
        """
        obj_hash = obj.hash
        path = self.path(obj_hash)

        if path.exists():
            logger.debug("Object %s already stored, skipped", obj_hash[:7])
            return obj_hash

        content = obj.frame()
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(dir=str(path.parent), prefix='.tmp_')
        try:
            with os.fdopen(fd, 'wb') as f:
                compressor = zlib.compressobj()
                for start in range(0, len(content), _CHUNK_SIZE):
                    f.write(compressor.compress(content[start:start + _CHUNK_SIZE]))
                f.write(compressor.flush())
                f.flush()
            os.chmod(temp_path, permission_bits(OBJECT_FILE_MODE))
            os.replace(temp_path, path)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.debug("Stored %s %s (%d bytes)", obj.type, obj_hash[:7], len(content))
        return obj_hash

    def load(self, obj_hash: str) -> GitObject:
        """
        Read object from the store.

        Args:
            obj_hash: 40-character SHA-1 hash

        Returns:
            GitObject: Decoded object (Blob, Tree, or Commit)

        Raises:
            ObjectNotFound: If there is no object with this hash
            InvalidObjectFormat: If the envelope or header is malformed, or the
                content doesn't hash to obj_hash
            UnknownObjectType: If the type tag is not blob, tree or commit
            SerializationError: If the payload can't be decoded
        """
        if not self._is_identifier(obj_hash):
            raise ObjectNotFound(obj_hash)

        path = self.path(obj_hash)
        if not path.is_file():
            raise ObjectNotFound(obj_hash)

        try:
            content = zlib.decompress(path.read_bytes())
        except zlib.error as e:
            raise InvalidObjectFormat(f"corrupt compressed data: {e}", obj_hash)

        null_idx = content.find(b'\0')
        if null_idx == -1:
            raise InvalidObjectFormat("missing header terminator", obj_hash)

        header = content[:null_idx]
        data = content[null_idx + 1:]

        try:
            obj_type, size_str = header.decode('ascii').split(' ')
        except (UnicodeDecodeError, ValueError):
            raise InvalidObjectFormat(f"invalid header {header!r}", obj_hash)

        if not size_str.isdigit():
            raise InvalidObjectFormat(f"invalid size {size_str!r}", obj_hash)

        if int(size_str) != len(data):
            raise InvalidObjectFormat(
                f"size mismatch: expected {size_str}, got {len(data)}", obj_hash
            )

        obj = parse_object(obj_type, data)
        if obj.hash != obj_hash:
            raise InvalidObjectFormat(f"content hashes to {obj.hash}", obj_hash)

        logger.debug("Loaded %s %s", obj_type, obj_hash[:7])
        return obj

    def _is_identifier(self, obj_hash: str) -> bool:
        return (
            isinstance(obj_hash, str)
            and len(obj_hash) > 2
            and set(obj_hash) <= _HEX_DIGITS
        )

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
