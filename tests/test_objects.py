"""Object model tests."""

import dataclasses
import json
import pytest
from datetime import datetime, timezone, timedelta
from bitgit.core.objects import (Blob, Tree, TreeEntry, Commit, OBJECT_TYPES,
                                 parse_object)
from bitgit.core.errors import SerializationError, UnknownObjectType


def test_blob_creation():
    """Test blob creation with data."""
    blob = Blob(b'hello world')
    assert blob.data == b'hello world'
    assert blob.type == 'blob'


def test_blob_serialize_is_raw_bytes():
    blob = Blob(b'\x00\xffbinary')
    assert blob.serialize() == b'\x00\xffbinary'


def test_blob_hash():
    """Test blob hash computation."""
    blob = Blob(b'hello')
    assert len(blob.hash) == 40
    assert blob.hash == Blob(b'hello').hash


def test_blob_hash_changes_with_one_byte():
    assert Blob(b'hello').hash != Blob(b'hellO').hash


def test_blob_is_immutable():
    """Test a blob can't be changed after its hash is computed."""
    blob = Blob(b'data')
    with pytest.raises(dataclasses.FrozenInstanceError):
        blob.data = b'other'


def test_blob_from_file(tmp_path):
    """Test blob creation from file."""
    path = tmp_path / 'file.txt'
    path.write_bytes(b'file content')
    assert Blob.from_file(str(path)).data == b'file content'


def test_blob_frame():
    assert Blob(b'hi').frame() == b'blob 2\x00hi'


def test_tree_entries_sorted_regardless_of_input_order():
    """Test entries are sorted by name however they're given."""
    tree = Tree((
        TreeEntry('100644', 'zebra.txt', 'a' * 40, 'blob'),
        TreeEntry('040000', 'middle', 'c' * 40, 'tree'),
        TreeEntry('100644', 'apple.txt', 'b' * 40, 'blob'),
    ))
    assert [e.name for e in tree.entries] == ['apple.txt', 'middle', 'zebra.txt']


def test_tree_sort_is_bytewise():
    """Test uppercase sorts before lowercase, as in byte order."""
    tree = Tree((
        TreeEntry('100644', 'b', 'a' * 40, 'blob'),
        TreeEntry('100644', 'B', 'a' * 40, 'blob'),
        TreeEntry('100644', 'a', 'a' * 40, 'blob'),
    ))
    assert [e.name for e in tree.entries] == ['B', 'a', 'b']


def test_tree_hash_independent_of_input_order():
    a = TreeEntry('100644', 'a.txt', 'a' * 40, 'blob')
    b = TreeEntry('100644', 'b.txt', 'b' * 40, 'blob')
    assert Tree((a, b)).hash == Tree((b, a)).hash


def test_tree_rejects_duplicate_names():
    with pytest.raises(ValueError, match="Duplicate"):
        Tree((
            TreeEntry('100644', 'same', 'a' * 40, 'blob'),
            TreeEntry('040000', 'same', 'b' * 40, 'tree'),
        ))


def test_tree_entry_rejects_separator_in_name():
    with pytest.raises(ValueError):
        TreeEntry('100644', 'dir/file', 'a' * 40, 'blob')


def test_tree_entry_rejects_unknown_type():
    with pytest.raises(ValueError):
        TreeEntry('100644', 'file', 'a' * 40, 'commit')


def test_tree_serialize_field_order():
    """Test tree payload is a compact JSON array with fixed key order."""
    tree = Tree((TreeEntry('100644', 'file.txt', 'a' * 40, 'blob'),))
    expected = '[{"mode":"100644","name":"file.txt","hash":"%s","type":"blob"}]' % ('a' * 40)
    assert tree.serialize() == expected.encode()


def test_empty_tree_serializes_to_empty_array():
    assert Tree().serialize() == b'[]'
    assert len(Tree()) == 0


def test_tree_roundtrip():
    tree = Tree((
        TreeEntry('100644', 'file1.txt', 'a' * 40, 'blob'),
        TreeEntry('100755', 'script.sh', 'b' * 40, 'blob'),
        TreeEntry('040000', 'subdir', 'c' * 40, 'tree'),
    ))
    loaded = Tree.deserialize(tree.serialize())
    assert loaded == tree
    assert loaded.hash == tree.hash


def test_tree_get():
    tree = Tree((TreeEntry('100644', 'file.txt', 'a' * 40, 'blob'),))
    assert tree.get('file.txt').hash == 'a' * 40
    assert tree.get('missing') is None


def test_tree_deserialize_rejects_bad_payload():
    with pytest.raises(SerializationError):
        Tree.deserialize(b'not json')
    with pytest.raises(SerializationError):
        Tree.deserialize(b'{"mode":"100644"}')
    with pytest.raises(SerializationError):
        Tree.deserialize(b'[{"mode":"100644","name":"x"}]')


def test_commit_create_defaults_timestamp():
    commit = Commit.create('a' * 40, None, 'John <john@example.com>', 'Initial commit')
    assert commit.type == 'commit'
    assert commit.parent is None
    assert commit.timestamp.tzinfo is not None


def test_commit_serialize_field_order():
    ts = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    commit = Commit.create('a' * 40, 'b' * 40, 'John <john@example.com>', 'msg', timestamp=ts)
    payload = commit.serialize().decode()
    assert list(json.loads(payload).keys()) == ['tree', 'parent', 'author', 'message', 'timestamp']
    assert '"timestamp":"2024-01-02T03:04:05+00:00"' in payload


def test_root_commit_parent_is_null():
    commit = Commit.create('a' * 40, None, 'John', 'msg')
    assert json.loads(commit.serialize())['parent'] is None


def test_commit_roundtrip():
    ts = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone(timedelta(hours=-5)))
    commit = Commit.create('a' * 40, 'b' * 40, 'Jane <jane@example.com>', 'line 1\n\nline 3', timestamp=ts)
    loaded = Commit.deserialize(commit.serialize())
    assert loaded == commit
    assert loaded.hash == commit.hash
    assert loaded.summary == 'line 1'


def test_commit_hash_depends_on_timestamp():
    t1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    t2 = t1 + timedelta(seconds=1)
    c1 = Commit.create('a' * 40, None, 'A', 'm', timestamp=t1)
    c2 = Commit.create('a' * 40, None, 'A', 'm', timestamp=t2)
    assert c1.hash != c2.hash


def test_commit_deserialize_rejects_missing_fields():
    with pytest.raises(SerializationError):
        Commit.deserialize(b'{"tree":"abc"}')
    with pytest.raises(SerializationError):
        Commit.deserialize(b'[]')


def test_object_types_is_closed_set():
    assert set(OBJECT_TYPES) == {'blob', 'tree', 'commit'}


def test_parse_object_dispatches_on_type():
    assert parse_object('blob', b'x') == Blob(b'x')
    assert isinstance(parse_object('tree', b'[]'), Tree)


def test_parse_object_unknown_type():
    with pytest.raises(UnknownObjectType):
        parse_object('tag', b'')
