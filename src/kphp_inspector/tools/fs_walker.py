"""
Filesystem walker for the KPHP Inspector.

This module provides the directory search primitive: a recursive scan that
returns files whose names contain (or start with) a fragment, compared
case-insensitively. A folder of KPHP output holds thousands of files in
subdirectories; matching is done on file names only, contents are never read
here.
"""

import os
from pathlib import Path
from typing import Dict, List, Iterator, Union
import logging

from ..config.parser import ConfigurationError


logger = logging.getLogger(__name__)


class FSWalker:
    """
    Filesystem walker that scans a directory tree for file names.

    Results come back in the order os.walk visits them; callers must not rely
    on that order meaning anything.
    """

    def __init__(self):
        self._stats = {
            'files_scanned': 0,
            'files_matched': 0,
            'directories_traversed': 0,
        }

    def find(self, root: Union[str, Path], fragment: str, anchored: bool = False) -> List[Path]:
        """
        Find files under root whose names match a fragment.

        Args:
            root: Directory to scan recursively
            fragment: Text to look for in file names (case-insensitive)
            anchored: Match the fragment as a file name prefix instead of a substring

        Returns:
            Matching file paths in scan order

        Raises:
            ConfigurationError: If root does not exist or is not a directory
        """
        root_path = Path(root)
        if not root_path.exists():
            raise ConfigurationError(f"Search root does not exist: {root_path}")
        if not root_path.is_dir():
            raise ConfigurationError(f"Search root is not a directory: {root_path}")

        needle = fragment.lower()
        matches = list(self._walk_directory(root_path, needle, anchored))
        logger.debug(f"Scan of {root_path} for '{fragment}' (anchored={anchored}): {len(matches)} files")
        return matches

    def _walk_directory(self, root_path: Path, needle: str, anchored: bool) -> Iterator[Path]:
        """
        Recursively walk a single directory tree.

        Args:
            root_path: Root directory to walk
            needle: Lower-cased fragment to match
            anchored: Whether the fragment must be a prefix

        Yields:
            Paths of matching files
        """
        for current_dir, subdirs, files in os.walk(root_path):
            current_path = Path(current_dir)
            self._stats['directories_traversed'] += 1

            for filename in files:
                self._stats['files_scanned'] += 1
                if self._matches(filename.lower(), needle, anchored):
                    self._stats['files_matched'] += 1
                    yield current_path / filename

    @staticmethod
    def _matches(filename: str, needle: str, anchored: bool) -> bool:
        if anchored:
            return filename.startswith(needle)
        return needle in filename

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the filesystem walking operation.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = {
            'files_scanned': 0,
            'files_matched': 0,
            'directories_traversed': 0,
        }
