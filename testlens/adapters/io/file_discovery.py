"""
File Discovery Service - locate JavaScript, TypeScript and Glimmer test files.

A file is a test file when its name or project-relative path matches one of
the configured test patterns, its extension is one testlens can extract from,
and no exclusion pattern matches it. Directories listed in ``exclude_dirs``
are never entered.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from ...config.models import TestPatternConfig
from ...domain.models import SCRIPT_SUFFIXES, TEMPLATE_SUFFIXES

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = SCRIPT_SUFFIXES | TEMPLATE_SUFFIXES

_GLOB_CHARS = ("*", "?", "[")


class FileDiscoveryError(Exception):
    """Exception raised when file discovery fails."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class FileDiscoveryService:
    """Service for discovering test files in a project."""

    def __init__(self, config: TestPatternConfig | None = None) -> None:
        """
        Initialize the file discovery service.

        Args:
            config: Patterns and exclusions; defaults when None

        Raises:
            FileDiscoveryError: If a configured pattern is blank
        """
        self.config = config or TestPatternConfig()
        self._check_patterns(self.config.test_patterns + self.config.exclude)
        self._exclude_dirs = frozenset(self.config.exclude_dirs)

    @staticmethod
    def _check_patterns(patterns: list) -> None:
        for pattern in patterns:
            if not isinstance(pattern, str):
                raise FileDiscoveryError(
                    f"Pattern must be a string, got {type(pattern)}: {pattern}"
                )
            if not pattern.strip():
                raise FileDiscoveryError(
                    f"Pattern cannot be empty or whitespace: {pattern!r}"
                )

    def discover_test_files(
        self,
        project_path: str | Path,
        test_patterns: list[str] | None = None,
    ) -> list[str]:
        """
        Discover test files in a project.

        Args:
            project_path: Directory to search
            test_patterns: Patterns used instead of ``config.test_patterns``

        Returns:
            Sorted absolute paths of the test files found

        Raises:
            FileDiscoveryError: On invalid arguments or a filesystem error
        """
        if not project_path:
            raise FileDiscoveryError("Project path cannot be empty")
        if test_patterns is not None:
            if not isinstance(test_patterns, list):
                raise FileDiscoveryError(
                    f"test_patterns must be a list, got {type(test_patterns)}"
                )
            self._check_patterns(test_patterns)

        root = Path(project_path)
        if not root.exists():
            raise FileDiscoveryError(f"Project path does not exist: {root}")
        if not root.is_dir():
            raise FileDiscoveryError(f"Project path must be a directory: {root}")

        root = root.resolve()
        patterns = test_patterns or self.config.test_patterns
        logger.debug(f"Discovering test files in {root} with patterns: {patterns}")

        try:
            found = sorted(
                str(path)
                for path, rel_path in self._walk(root)
                if self._is_test_file(path, rel_path, patterns)
            )
        except OSError as e:
            logger.error(f"Filesystem error during test file discovery in {root}: {e}")
            raise FileDiscoveryError(
                f"Test file discovery failed due to filesystem error: {e}", cause=e
            ) from e

        logger.info(f"Discovered {len(found)} test files in {root}")
        return found

    def _walk(self, root: Path) -> Iterator[tuple[Path, str]]:
        """Yield every file under ``root`` outside excluded directories."""
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            # Prune in place so os.walk skips excluded trees
            dirnames[:] = [
                d for d in dirnames if not self._skip_directory(current / d, root)
            ]
            for filename in filenames:
                path = current / filename
                yield path, path.relative_to(root).as_posix()

    def _skip_directory(self, dir_path: Path, root: Path) -> bool:
        if dir_path.name in self._exclude_dirs:
            return True
        rel_path = dir_path.relative_to(root).as_posix()
        for pattern in self.config.exclude:
            if self._matches_pattern(rel_path, pattern):
                logger.debug(f"Directory {rel_path} excluded by pattern '{pattern}'")
                return True
        return False

    def _is_test_file(self, path: Path, rel_path: str, patterns: list[str]) -> bool:
        if path.suffix.lower() not in SUPPORTED_SUFFIXES:
            return False
        if not any(
            self._matches_pattern(path.name, pattern)
            or self._matches_pattern(rel_path, pattern)
            for pattern in patterns
        ):
            return False
        for pattern in self.config.exclude:
            if self._matches_pattern(rel_path, pattern):
                logger.debug(f"File {rel_path} excluded by pattern '{pattern}'")
                return False
        return True

    def _matches_pattern(self, file_path: str, pattern: str) -> bool:
        """
        Check a path against a pattern.

        Glob patterns are matched with ``Path.match``, anchored at the right;
        plain strings match as substrings.
        """
        if any(char in pattern for char in _GLOB_CHARS):
            return Path(file_path).match(pattern)
        return pattern in file_path
