"""Hash utilities for BitGit."""

import hashlib


def frame(obj_type: str, payload: bytes) -> bytes:
    """
    Wrap a payload in the object envelope.

    Format: <type> <size>\\0<payload>

    Args:
        obj_type: Object type tag (blob, tree, commit)
        payload: Canonical payload bytes

    Returns:
        bytes: Framed object data
    """
    return f"{obj_type} {len(payload)}\0".encode() + payload


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_payload(obj_type: str, payload: bytes) -> str:
    """
    Compute the identifier of a typed payload.

    Args:
        obj_type: Object type tag
        payload: Canonical payload bytes

    Returns:
        40-character hex string
    """
    return hash_object(frame(obj_type, payload))
