"""Build nested tree objects from the flat staging index."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .index import IndexEntry
from .objects import MODE_DIRECTORY, Tree, TreeEntry

logger = logging.getLogger(__name__)


@dataclass
class DirNode:
    """One directory level: its subdirectories by name and the files directly in it."""
    name: str
    children: Dict[str, 'DirNode'] = field(default_factory=dict)
    files: List[IndexEntry] = field(default_factory=list)


def build_hierarchy(entries: Iterable[IndexEntry]) -> DirNode:
    """
    Arrange index entries into a directory hierarchy.

    Args:
        entries: Index entries with '/'-separated paths

    Returns:
        DirNode: The root directory
    """
    root = DirNode(name='')

    for entry in entries:
        *dirs, _ = entry.path.split('/')
        current = root
        for part in dirs:
            if part not in current.children:
                current.children[part] = DirNode(name=part)
            current = current.children[part]
        current.files.append(entry)

    return root


def build_level(entries: Iterable[TreeEntry]) -> Tree:
    """
    Make a tree from the entries of one directory.

    Files and subdirectories are sorted together by name, byte-wise.
    """
    return Tree(tuple(sorted(entries, key=TreeEntry.sort_key)))


def build_tree(repo, node: DirNode) -> Tree:
    """
    Convert a directory node into a tree, storing every subtree on the way.

    The returned tree itself is not stored.

    Args:
        repo: Repository instance
        node: Directory to convert

    Returns:
        Tree: Tree for this directory
    """
    entries = [
        TreeEntry(mode=f.mode, name=f.path.rsplit('/', 1)[-1], hash=f.hash, type='blob')
        for f in node.files
    ]

    for name in sorted(node.children):
        subtree = build_tree(repo, node.children[name])
        subtree_hash = repo.write_object(subtree)
        entries.append(TreeEntry(mode=MODE_DIRECTORY, name=name, hash=subtree_hash, type='tree'))

    return build_level(entries)


def create_tree_from_index(repo, entries: Iterable[IndexEntry]) -> Tree:
    """
    Build the root tree for a commit from index entries.

    An empty index gives an empty root tree.

    Args:
        repo: Repository instance
        entries: Staged entries

    Returns:
        Tree: Root tree, not yet stored
    """
    root = build_hierarchy(entries)
    tree = build_tree(repo, root)
    logger.debug("Built root tree %s with %d entries", tree.hash[:7], len(tree))
    return tree
