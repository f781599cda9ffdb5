"""
Unit tests for configuration data models.
"""

import os
import tempfile
import shutil
from pathlib import Path
import pytest
from pydantic import ValidationError

from kphp_inspector.models.config import DiffConfig, InspectorConfig


class TestInspectorConfig:
    """Test cases for InspectorConfig model."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir).resolve()

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_defaults(self):
        """Test the generator's default naming conventions."""
        config = InspectorConfig(root=str(self.root))

        assert config.root == str(self.root)
        assert config.class_subdir == "cl"
        assert config.class_file_prefix == "C@"
        assert config.source_extension == ".cpp"
        assert config.header_extension == ".h"
        assert config.debug is False

    def test_paths(self):
        config = InspectorConfig(root=str(self.root))

        assert config.root_path == self.root
        assert config.class_root == self.root / "cl"
        assert config.class_path_marker == "cl/C@"

    def test_root_normalized(self):
        config = InspectorConfig(root=f"  {self.root}/./  ")
        assert config.root == str(self.root)

    def test_root_must_exist(self):
        with pytest.raises(ValidationError, match="does not exist"):
            InspectorConfig(root=str(self.root / "missing"))

    def test_root_must_be_directory(self):
        file_path = self.root / "file.cpp"
        file_path.write_text("")
        with pytest.raises(ValidationError, match="not a directory"):
            InspectorConfig(root=str(file_path))

    def test_empty_root(self):
        with pytest.raises(ValidationError, match="must be specified"):
            InspectorConfig(root="  ")

    def test_extension_dot_added(self):
        config = InspectorConfig(root=str(self.root), source_extension="cc", header_extension="hpp")
        assert config.source_extension == ".cc"
        assert config.header_extension == ".hpp"

    def test_frozen(self):
        config = InspectorConfig(root=str(self.root))
        with pytest.raises(ValidationError):
            config.debug = True

    def test_dict_round_trip(self):
        config = InspectorConfig(root=str(self.root), debug=True)
        assert InspectorConfig.from_dict(config.to_dict()) == config
        assert str(config) == f"InspectorConfig(root={self.root}, debug=True)"


class TestDiffConfig:
    """Test cases for DiffConfig model."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.base = Path(self.temp_dir).resolve()
        for name in ("master", "cmp", "diff"):
            (self.base / name).mkdir()

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _config(self, **kwargs):
        values = {
            'master_root': str(self.base / "master"),
            'cmp_root': str(self.base / "cmp"),
            'diff_root': str(self.base / "diff"),
        }
        values.update(kwargs)
        return DiffConfig(**values)

    def test_defaults(self):
        config = self._config()

        assert config.skip_comments is False
        assert config.header_bytes == 64
        assert config.comment_free_bytes == 30

    def test_missing_directory(self):
        with pytest.raises(ValidationError, match="Diff directory does not exist"):
            self._config(diff_root=str(self.base / "nope"))

    def test_positive_sizes(self):
        with pytest.raises(ValidationError):
            self._config(header_bytes=0)
