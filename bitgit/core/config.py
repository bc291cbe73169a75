"""Configuration management for BitGit.

Repository-local settings live in ``.git/config`` and per-user settings in
``~/.bitgitconfig``, both INI files. Environment variables override both.
"""

import configparser
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = 'main'


class Config:
    """
    Layered BitGit configuration.

    Lookup order (highest to lowest):
    1. Environment variables (BITGIT_<SECTION>_<KEY>)
    2. Repository config (.git/config)
    3. Global config (~/.bitgitconfig)
    4. Fallback value
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.bitgitconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        self.repo_config_path = repo_config_path
        self._global_config: Optional[configparser.ConfigParser] = None
        self._repo_config: Optional[configparser.ConfigParser] = None

    @staticmethod
    def _load(path: Path) -> configparser.ConfigParser:
        parser = configparser.ConfigParser()
        if path.exists():
            parser.read(path)
        return parser

    @property
    def global_config(self) -> configparser.ConfigParser:
        if self._global_config is None:
            self._global_config = self._load(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._load(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Args:
            section: Config section (e.g., 'user', 'init')
            key: Config key (e.g., 'name', 'defaultbranch')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_value = os.environ.get(f"BITGIT_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        for parser in (self.repo_config, self.global_config):
            if parser is not None and parser.has_option(section, key):
                return parser.get(section, key)

        return fallback

    def _target(self, global_config: bool) -> Tuple[configparser.ConfigParser, Path]:
        if global_config:
            return self.global_config, self.GLOBAL_CONFIG_PATH
        if not self.repo_config_path:
            raise ValueError("No repository config path available")
        return self.repo_config, self.repo_config_path

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value and save the file.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: Write to ~/.bitgitconfig instead of .git/config
        """
        parser, path = self._target(global_config)

        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, value)

        with open(path, 'w') as f:
            parser.write(f)
        logger.debug("Set %s.%s in %s", section, key, path)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        parser, path = self._target(global_config)

        if not parser.has_option(section, key):
            return False

        parser.remove_option(section, key)
        if not parser.options(section):
            parser.remove_section(section)

        with open(path, 'w') as f:
            parser.write(f)
        logger.debug("Unset %s.%s in %s", section, key, path)
        return True

    def list_all(self) -> Dict[str, Dict[str, str]]:
        """
        List effective configuration values, repository values overriding
        global ones.

        Returns:
            Dict of sections to key-value dicts
        """
        result: Dict[str, Dict[str, str]] = {}
        for parser in (self.global_config, self.repo_config):
            if parser is None:
                continue
            for section in parser.sections():
                result.setdefault(section, {}).update(parser.items(section))
        return result

    def get_user_identity(self) -> Tuple[Optional[str], Optional[str]]:
        """
        Get user name and email for commits.

        BITGIT_AUTHOR_NAME/EMAIL and GIT_AUTHOR_NAME/EMAIL take precedence
        over user.name/user.email.

        Returns:
            Tuple of (name, email), either may be None
        """
        name = (os.environ.get('BITGIT_AUTHOR_NAME')
                or os.environ.get('GIT_AUTHOR_NAME')
                or self.get('user', 'name'))
        email = (os.environ.get('BITGIT_AUTHOR_EMAIL')
                 or os.environ.get('GIT_AUTHOR_EMAIL')
                 or self.get('user', 'email'))
        return name, email

    def get_author(self) -> Optional[str]:
        """Author string ("Name <email>"), or None when no name is configured."""
        name, email = self.get_user_identity()
        if not name:
            return None
        return f"{name} <{email}>" if email else name

    def get_default_branch(self) -> str:
        """Branch a new repository's HEAD points to."""
        return self.get('init', 'defaultbranch', fallback=DEFAULT_BRANCH)


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    if repo:
        return Config(repo.config_file)
    return Config()
