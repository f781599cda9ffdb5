"""
Unit tests for choosing one candidate among several.
"""

import os
import tempfile
import shutil
from pathlib import Path
from unittest.mock import MagicMock

from kphp_inspector.models.artifacts import ArtifactKind
from kphp_inspector.tools.disambiguator import ERROR_LABEL, Disambiguator, candidate_label

from cpp_samples import ANALYZE_ALL_CPP, CLASS_POST_H, NOT_A_FUNCTION_CPP, PLAIN_FUNCTION_CPP


class TestDisambiguator:
    """Test cases for the Disambiguator class."""

    def setup_method(self):
        """Set up candidate files."""
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)

        self.analyze = self.root / "VK@Feed@Post@@analyze.cpp"
        self.analyze.write_text(PLAIN_FUNCTION_CPP, encoding='utf-8')
        self.analyze_all = self.root / "VK@Feed@Post@@analyzeAll.cpp"
        self.analyze_all.write_text(ANALYZE_ALL_CPP, encoding='utf-8')
        self.broken = self.root / "post_globals.cpp"
        self.broken.write_text(NOT_A_FUNCTION_CPP, encoding='utf-8')

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_no_candidates(self):
        chooser = MagicMock()
        assert Disambiguator(chooser).resolve([], ArtifactKind.FUNCTION) is None
        chooser.assert_not_called()

    def test_single_candidate_skips_menu(self):
        chooser = MagicMock()
        result = Disambiguator(chooser).resolve([self.analyze], ArtifactKind.FUNCTION)

        assert result == self.analyze
        chooser.assert_not_called()

    def test_many_candidates_use_chooser(self):
        chooser = MagicMock(return_value=1)
        result = Disambiguator(chooser).resolve([self.analyze, self.analyze_all], ArtifactKind.FUNCTION)

        assert result == self.analyze_all
        chooser.assert_called_once_with(["VK\\Feed\\Post::analyze", "VK\\Feed\\Post::analyzeAll"])

    def test_unparseable_candidate_labelled(self):
        """Test that a broken file shows an error label instead of failing the menu."""
        chooser = MagicMock(return_value=0)
        Disambiguator(chooser).resolve([self.broken, self.analyze], ArtifactKind.FUNCTION)

        chooser.assert_called_once_with([ERROR_LABEL, "VK\\Feed\\Post::analyze"])

    def test_cancelled(self):
        chooser = MagicMock(return_value=None)
        result = Disambiguator(chooser).resolve([self.analyze, self.analyze_all], ArtifactKind.FUNCTION)
        assert result is None


class TestCandidateLabel:
    """Test cases for menu labels."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_class_label(self):
        path = self.root / "C@VK@Feed@Post.h"
        path.write_text(CLASS_POST_H, encoding='utf-8')
        assert candidate_label(path, ArtifactKind.CLASS) == "VK\\Feed\\Post"

    def test_function_file_as_class(self):
        path = self.root / "VK@Feed@Post@@analyze.cpp"
        path.write_text(PLAIN_FUNCTION_CPP, encoding='utf-8')
        assert candidate_label(path, ArtifactKind.CLASS) == ERROR_LABEL

    def test_missing_file(self):
        assert candidate_label(self.root / "gone.cpp", ArtifactKind.FUNCTION) == ERROR_LABEL
