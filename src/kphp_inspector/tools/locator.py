"""
Candidate locator for the KPHP Inspector.

Finds the generated files of functions and classes by user query. Matching is
done on file names, not contents: for the query "VK\\Post::analyze" we get
['vk', 'post', 'analyze'], scan for files containing the longest token, and
keep the ones containing all tokens as whole words. Fully qualified queries
("\\VK\\Post::analyze") are turned into the generator's file name and looked
up as an exact prefix instead.
"""

import re
from pathlib import Path
from typing import List, Optional, Sequence
import logging

from ..models.config import InspectorConfig
from ..models.search_query import SearchQuery
from .fs_walker import FSWalker


logger = logging.getLogger(__name__)

FUNCTION_MARKER = ' f$'


def matches_tokens(path: str, tokens: Sequence[str]) -> bool:
    """
    Check that every token occurs in path as a whole word.

    A token must not be glued to another letter or digit: 'post' matches
    'cl/C@Wall@Post.h' and 'post_send.cpp' but not 'postpone.cpp'.

    Args:
        path: File path to check
        tokens: Lower-cased search tokens

    Returns:
        True if all tokens occur at word boundaries
    """
    lowered = path.lower()
    for token in tokens:
        pattern = rf'(?<![a-z0-9]){re.escape(token)}(?![a-z0-9])'
        if not re.search(pattern, lowered):
            return False
    return True


def contains_function(path: Path) -> bool:
    """Check that a generated file holds a function definition, not just declarations."""
    try:
        content = path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        logger.warning(f"Cannot read candidate {path}: {e}")
        return False
    return FUNCTION_MARKER in content and '(' in content


class CandidateLocator:
    """
    Finds candidate files for function and class queries.

    Output order is the directory scan order. Nothing is cached between
    queries.
    """

    def __init__(self, config: InspectorConfig, walker: Optional[FSWalker] = None):
        """
        Initialize the locator.

        Args:
            config: Inspector configuration with the generated tree root
            walker: Directory search primitive, a fresh FSWalker by default
        """
        self.config = config
        self.walker = walker or FSWalker()

    def find_function_candidates(self, query: SearchQuery) -> List[Path]:
        """
        Find generated files that may hold the function a query asks for.

        Args:
            query: Parsed user query

        Returns:
            Candidate file paths, one per function

        Raises:
            ConfigurationError: If the root directory does not exist
        """
        root = self.config.root_path
        self.walker.reset_stats()

        if query.is_fully_qualified:
            generator_path = query.generator_path
            if not generator_path:
                return []
            found = self.walker.find(root, f"{generator_path}.", anchored=True)
            candidates = self.filter_function_files(found)
        else:
            tokens = query.tokens
            if not tokens:
                return []
            found = self.walker.find(root, query.longest_token)
            candidates = [
                path for path in self.filter_function_files(found)
                if matches_tokens(self._relative(path, root), tokens)
            ]

        candidates = [path for path in candidates if contains_function(path)]
        self._log_scan("Function", query, found, candidates)
        return candidates

    def find_class_candidates(self, query: SearchQuery) -> List[Path]:
        """
        Find class declaration headers matching a query.

        Args:
            query: Parsed user query

        Returns:
            Candidate header paths under the class directory

        Raises:
            ConfigurationError: If the class directory does not exist
        """
        class_root = self.config.class_root
        self.walker.reset_stats()

        if query.is_fully_qualified:
            generator_path = query.generator_path
            if not generator_path:
                return []
            prefix = f"{self.config.class_file_prefix}{generator_path}."
            found = self.walker.find(class_root, prefix, anchored=True)
            candidates = [path for path in found if self._is_header(path)]
        else:
            tokens = query.tokens
            if not tokens:
                return []
            found = self.walker.find(class_root, query.longest_token)
            candidates = [
                path for path in found
                if self._is_header(path) and matches_tokens(self._relative(path, class_root), tokens)
            ]

        self._log_scan("Class", query, found, candidates)
        return candidates

    def filter_function_files(self, paths: Sequence[Path]) -> List[Path]:
        """
        Keep files that can hold a function body, one per function.

        A .cpp file is always kept. A header is kept only if the function was
        inlined into it: no .cpp with the same stem was found, and it is not
        a class declaration header.

        Args:
            paths: Files found by the directory scan

        Returns:
            Filtered paths in their original order
        """
        source_ext = self.config.source_extension
        header_ext = self.config.header_extension

        source_stems = {
            self._stem(path, source_ext) for path in paths if path.name.endswith(source_ext)
        }

        kept = []
        seen = set()
        for path in paths:
            if path in seen:
                continue
            if path.name.endswith(source_ext):
                keep = True
            elif path.name.endswith(header_ext):
                keep = (self._stem(path, header_ext) not in source_stems
                        and not self._is_class_header(path))
            else:
                keep = False

            if keep:
                seen.add(path)
                kept.append(path)

        return kept

    def _log_scan(self, kind: str, query: SearchQuery,
                  found: Sequence[Path], candidates: Sequence[Path]) -> None:
        stats = self.walker.get_stats()
        logger.debug(
            f"{kind} query '{query}': {stats['files_scanned']} files scanned in "
            f"{stats['directories_traversed']} directories, {len(found)} matched, "
            f"{len(candidates)} candidates"
        )

    def _is_header(self, path: Path) -> bool:
        return path.name.endswith(self.config.header_extension)

    def _is_class_header(self, path: Path) -> bool:
        relative = self._relative(path, self.config.root_path)
        return relative.startswith(self.config.class_path_marker) or \
            f"/{self.config.class_path_marker}" in relative

    @staticmethod
    def _stem(path: Path, extension: str) -> str:
        return str(path)[:-len(extension)]

    @staticmethod
    def _relative(path: Path, root: Path) -> str:
        """Path relative to the search root, so the root's own name never matches tokens."""
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            return path.as_posix()
