"""
Choosing one file among several candidates.

When a query matches many functions or classes, each candidate is labelled
with its PHP name and the user picks one in an interactive menu. The menu
itself is a collaborator passed in as a callable, so the decision rules here
do not need a terminal.
"""

from pathlib import Path
from typing import Callable, List, Optional, Sequence
import logging

from ..models.artifacts import ArtifactKind
from .cpp_parser import ExtractionError, read_class_name, read_function_name


logger = logging.getLogger(__name__)

ERROR_LABEL = '<error>'

# Receives menu labels, returns the chosen index or None when cancelled
Chooser = Callable[[List[str]], Optional[int]]


def candidate_label(path: Path, kind: ArtifactKind) -> str:
    """
    Get the PHP name of a candidate for display in a menu.

    A file that cannot be parsed gets the '<error>' label instead of failing
    the whole menu.
    """
    try:
        if kind == ArtifactKind.CLASS:
            name = read_class_name(path)
        else:
            name = read_function_name(path)
    except ExtractionError as e:
        logger.warning(f"Cannot label candidate: {e}")
        return ERROR_LABEL
    return name or ERROR_LABEL


class Disambiguator:
    """Resolves a list of candidates into exactly one file, or none."""

    def __init__(self, chooser: Chooser):
        """
        Args:
            chooser: Interactive selection, called only for two or more candidates
        """
        self.chooser = chooser

    def resolve(self, candidates: Sequence[Path], kind: ArtifactKind) -> Optional[Path]:
        """
        Pick one candidate.

        Args:
            candidates: Files found by the locator, already filtered by kind
            kind: Whether candidates are functions or classes

        Returns:
            The chosen file; None if there are no candidates or the user cancelled
        """
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        labels = [candidate_label(path, kind) for path in candidates]
        index = self.chooser(labels)
        if index is None:
            logger.debug(f"Selection among {len(candidates)} candidates cancelled")
            return None
        return candidates[index]
