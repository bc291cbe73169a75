"""Repository management for BitGit."""

import logging
from pathlib import Path
from typing import Iterator, Optional

from .errors import InvalidObjectFormat, NotARepository, RepositoryExists
from .objects import Commit, GitObject
from .refs import check_branch_name
from .tree_builder import create_tree_from_index

logger = logging.getLogger(__name__)

GIT_DIR_NAME = '.git'


class Repository:
    """
    Represents a BitGit repository.

    A repository manages the .git directory structure and ties together the
    object store, the staging index and the references. It exposes the four
    operations callers use: init, add, commit and log.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.git_dir = self.work_tree / GIT_DIR_NAME
        self.objects_dir = self.git_dir / 'objects'
        self.refs_dir = self.git_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.git_dir / 'HEAD'
        self.index_file = self.git_dir / 'index'
        self.config_file = self.git_dir / 'config'

        self._store = None
        self._index = None
        self._ref_manager = None
        self._config = None

    @property
    def store(self):
        """Get ObjectStore instance."""
        if self._store is None:
            from .store import ObjectStore
            self._store = ObjectStore(self.objects_dir)
        return self._store

    @property
    def index(self):
        """Get Index instance."""
        if self._index is None:
            from .index import Index
            self._index = Index(self)
        return self._index

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self):
        """Get Config instance."""
        if self._config is None:
            from .config import get_config
            self._config = get_config(self)
        return self._config

    def init(self, branch: Optional[str] = None) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .git directory structure:
        .git/
        ├── objects/       # Object database
        ├── refs/
        │   └── heads/     # Branch references
        ├── HEAD           # Current branch
        ├── index          # Staging area ("[]")
        └── config         # Repository configuration

        Args:
            branch: Initial branch name (defaults to init.defaultbranch or 'main')

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExists: If .git already exists
            ValueError: If the branch name is invalid
        """
        if self.git_dir.exists():
            raise RepositoryExists(str(self.git_dir))

        if branch is None:
            branch = self.config.get_default_branch()
        check_branch_name(branch)

        self.work_tree.mkdir(parents=True, exist_ok=True)
        self.git_dir.mkdir()
        self.objects_dir.mkdir()
        self.refs_dir.mkdir()
        self.heads_dir.mkdir()

        self.refs.set_head_branch(branch)
        self.index_file.write_text('[]')
        self.config_file.write_text('[core]\n\trepositoryformatversion = 0\n')
        # Drop the config read before .git/config existed
        self._config = None

        logger.info("Initialized empty repository in %s", self.git_dir)
        return self

    @classmethod
    def load(cls, path: str = '.') -> 'Repository':
        """
        Open an existing repository rooted at path.

        Raises:
            NotARepository: If path has no .git directory
        """
        repo = cls(path)
        if not repo.git_dir.is_dir():
            raise NotARepository(str(repo.work_tree))
        return repo

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / GIT_DIR_NAME).is_dir():
                return cls(str(current))

            if current == current.parent:
                return None

            current = current.parent

    def relative_path(self, path) -> str:
        """
        Express a path inside the work tree as a POSIX path relative to it.

        Raises:
            ValueError: If the path is outside the work tree or inside .git
        """
        path = Path(path)
        if not path.is_absolute():
            path = self.work_tree / path
        path = path.parent.resolve() / path.name

        try:
            rel = path.relative_to(self.work_tree)
        except ValueError:
            raise ValueError(f"{path} is outside repository at {self.work_tree}")

        if not rel.parts:
            raise ValueError(f"{path} is the repository root")
        if rel.parts[0] == GIT_DIR_NAME:
            raise ValueError(f"{path} is inside {GIT_DIR_NAME}")
        return rel.as_posix()

    def object_path(self, obj_hash: str) -> Path:
        """Get filesystem path for an object."""
        return self.store.path(obj_hash)

    def write_object(self, obj: GitObject) -> str:
        """
        Write object to repository.

        Returns:
            str: SHA-1 hash of the object
        """
        return self.store.store(obj)

    def read_object(self, obj_hash: str) -> GitObject:
        """
        Read object from repository.

        Returns:
            GitObject: Decoded object (Blob, Tree, or Commit)
        """
        return self.store.load(obj_hash)

    def object_exists(self, obj_hash: str) -> bool:
        """Check if object exists in repository."""
        return self.store.exists(obj_hash)

    def add(self, path):
        """
        Stage a file.

        Args:
            path: File path relative to the work tree, or absolute

        Returns:
            IndexEntry: The staged entry
        """
        return self.index.stage(path)

    def commit(self, message: str, author: str) -> str:
        """
        Record the staged files as a new commit on the active branch.

        The tree is built from the whole index, which is left as is, so a
        second commit without new staging records the same tree again.
        Objects are written before the ref is moved; if the ref update fails
        the objects stay in the store.

        Args:
            message: Commit message
            author: Author string ("Name <email>")

        Returns:
            str: Hash of the new commit
        """
        tree = create_tree_from_index(self, self.index.read())
        tree_hash = self.write_object(tree)

        parent = self.refs.resolve_head()
        commit = Commit.create(
            tree_hash=tree_hash,
            parent_hash=parent,
            author=author,
            message=message,
        )
        commit_hash = self.write_object(commit)
        self.refs.update_head(commit_hash)

        logger.info("Created commit %s (parent %s)", commit_hash[:7],
                    parent[:7] if parent else 'none')
        return commit_hash

    def log(self, limit: Optional[int] = None) -> Iterator[Commit]:
        """
        Walk history from HEAD, newest first.

        Yields nothing when there are no commits yet.

        Args:
            limit: Maximum number of commits to yield (None for all)

        Yields:
            Commit objects, following parent links

        Raises:
            InvalidObjectFormat: If a hash in the chain isn't a commit
        """
        commit_hash = self.refs.resolve_head()
        count = 0

        while commit_hash and (limit is None or count < limit):
            commit = self.read_object(commit_hash)
            if not isinstance(commit, Commit):
                raise InvalidObjectFormat(f"expected commit, found {commit.type}", commit_hash)

            yield commit
            count += 1
            commit_hash = commit.parent

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
