"""Hash utilities tests."""

import hashlib
from bitgit.core.hash import frame, hash_object, hash_payload


def test_hash_object_empty():
    """Test hashing empty bytes."""
    result = hash_object(b'')
    assert len(result) == 40
    assert result == 'da39a3ee5e6b4b0d3255bfef95601890afd80709'


def test_hash_object_deterministic():
    """Test hash consistency for same input."""
    assert hash_object(b'hello world') == hash_object(b'hello world')


def test_hash_object_different_data():
    """Test different data produces different hashes."""
    assert hash_object(b'hello') != hash_object(b'hellp')


def test_frame_layout():
    """Test envelope is '<type> <size>\\0<payload>'."""
    assert frame('blob', b'hi') == b'blob 2\x00hi'
    assert frame('tree', b'') == b'tree 0\x00'


def test_frame_size_counts_bytes():
    """Test size is the byte length, not the character count."""
    payload = 'é'.encode('utf-8')
    assert frame('blob', payload) == b'blob 2\x00' + payload


def test_hash_payload_matches_git_blob_hash():
    """Test blob hashes agree with git hash-object."""
    # git hash-object of "hello\n"
    assert hash_payload('blob', b'hello\n') == 'ce013625030ba8dba906f756967f9e9ca394464a'


def test_hash_payload_depends_on_type():
    """Test same payload under different types gives different hashes."""
    assert hash_payload('blob', b'[]') != hash_payload('tree', b'[]')


def test_hash_payload_is_sha1_of_frame():
    data = b'some content'
    assert hash_payload('blob', data) == hashlib.sha1(b'blob 12\x00' + data).hexdigest()
