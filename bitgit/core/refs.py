"""Reference management for BitGit."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

SYMREF_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'


def check_branch_name(branch_name: str) -> str:
    """
    Reject branch names that can't be stored safely under refs/heads.

    A subset of git check-ref-format: the name must be non-empty and
    relative, and no component may be empty, '.', '..' or start with a dot.
    Control characters, backslashes and '..' anywhere are refused too.

    Returns:
        The name unchanged

    Raises:
        ValueError: If the name is invalid
    """
    if not isinstance(branch_name, str) or not branch_name:
        raise ValueError("branch name must not be empty")
    if branch_name.startswith('/') or branch_name.endswith('/'):
        raise ValueError(f"invalid branch name {branch_name!r}")
    if '..' in branch_name or '\\' in branch_name:
        raise ValueError(f"invalid branch name {branch_name!r}")
    if any(ord(ch) < 0x20 or ch == '\x7f' for ch in branch_name):
        raise ValueError(f"invalid branch name {branch_name!r}")
    for part in branch_name.split('/'):
        if not part or part.startswith('.') or part.endswith('.lock'):
            raise ValueError(f"invalid branch name {branch_name!r}")
    return branch_name


class RefManager:
    """
    Manages references (branches and HEAD).

    Handles:
    - Symbolic HEAD ("ref: refs/heads/<branch>")
    - Direct HEAD (detached, a commit hash)
    - Branch references (refs/heads/*)

    A branch ref that doesn't exist yet means the branch has no commits;
    that resolves to None, not an error.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.git_dir = repo.git_dir
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file

    def _read_head(self) -> Optional[str]:
        if not self.head_file.exists():
            return None
        return self.head_file.read_text().strip()

    def read_ref(self, ref_name: str) -> Optional[str]:
        """
        Read a reference and return its commit hash.

        Args:
            ref_name: Reference path (e.g., 'refs/heads/main') or 'HEAD'

        Returns:
            Commit hash or None if the reference doesn't exist
        """
        if ref_name == 'HEAD':
            return self.resolve_head()

        ref_path = self.git_dir / ref_name
        if not ref_path.is_file():
            return None

        content = ref_path.read_text().strip()
        if content.startswith(SYMREF_PREFIX):
            return self.read_ref(content[len(SYMREF_PREFIX):])
        return content or None

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit hash.

        Returns:
            Commit hash, or None when there are no commits yet
        """
        content = self._read_head()
        if not content:
            return None

        if content.startswith(SYMREF_PREFIX):
            return self.read_ref(content[len(SYMREF_PREFIX):])

        # Detached HEAD
        return content

    def get_current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if in detached HEAD state
        """
        content = self._read_head()
        if content and content.startswith(SYMREF_PREFIX + HEADS_PREFIX):
            return content[len(SYMREF_PREFIX + HEADS_PREFIX):]
        return None

    def is_detached_head(self) -> bool:
        """True if HEAD holds a commit hash rather than a branch."""
        content = self._read_head()
        return bool(content) and not content.startswith(SYMREF_PREFIX)

    def set_head_branch(self, branch_name: str) -> None:
        """Point HEAD at a branch; the branch need not exist yet."""
        check_branch_name(branch_name)
        self.head_file.write_text(f'{SYMREF_PREFIX}{HEADS_PREFIX}{branch_name}\n')
        logger.debug("HEAD -> %s%s", HEADS_PREFIX, branch_name)

    def update_branch(self, branch_name: str, commit_hash: str) -> None:
        """
        Point a branch at a commit, creating it if needed.

        Args:
            branch_name: Branch name
            commit_hash: Commit hash

        Raises:
            ValueError: If the branch name is invalid
        """
        check_branch_name(branch_name)
        ref_path = self.heads_dir / branch_name
        ref_path.parent.mkdir(parents=True, exist_ok=True)
        ref_path.write_text(commit_hash + '\n')
        logger.debug("Updated %s%s to %s", HEADS_PREFIX, branch_name, commit_hash[:7])

    def update_head(self, commit_hash: str) -> None:
        """
        Move the active branch to a commit, or HEAD itself when detached.

        Args:
            commit_hash: Commit hash
        """
        content = self._read_head()
        if content and content.startswith(SYMREF_PREFIX):
            ref_name = content[len(SYMREF_PREFIX):]
            if ref_name.startswith(HEADS_PREFIX):
                self.update_branch(ref_name[len(HEADS_PREFIX):], commit_hash)
            else:
                check_branch_name(ref_name)
                ref_path = self.git_dir / ref_name
                ref_path.parent.mkdir(parents=True, exist_ok=True)
                ref_path.write_text(commit_hash + '\n')
                logger.debug("Updated %s to %s", ref_name, commit_hash[:7])
        else:
            self.head_file.write_text(commit_hash + '\n')
            logger.debug("Updated detached HEAD to %s", commit_hash[:7])
