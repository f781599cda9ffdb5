"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, command-line overrides, validation,
and error handling functionality of the ConfigParser class.
"""

import pytest
import tempfile
import os
import shutil
import yaml
from pathlib import Path

from kphp_inspector.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_diff_config,
)
from kphp_inspector.models.config import DiffConfig, InspectorConfig


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def setup_method(self):
        """Set up a generated tree and an empty search directory."""
        self.temp_dir = tempfile.mkdtemp()
        self.base = Path(self.temp_dir).resolve()
        self.root = self.base / "kphp_out"
        (self.root / "cl").mkdir(parents=True)
        self.search_dir = self.base / "home"
        self.search_dir.mkdir()
        self.parser = ConfigParser(search_paths=[self.search_dir])

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write_config(self, data, name="inspector.yaml"):
        path = self.base / name
        with open(path, 'w') as f:
            yaml.dump(data, f)
        return path

    def test_init_default(self):
        """Test default initialization."""
        parser = ConfigParser()
        assert parser.DEFAULT_CONFIG_NAMES == [
            '.kphp-inspector.yaml',
            '.kphp-inspector.yml',
            'kphp-inspector.yaml',
        ]
        assert parser.search_paths == [Path.cwd(), Path.home()]

    def test_load_config_with_valid_file(self):
        """Test loading configuration from valid YAML file."""
        config_path = self._write_config({'root': str(self.root), 'debug': True})

        result = self.parser.load_config(config_path)

        assert isinstance(result, ConfigParseResult)
        assert isinstance(result.config, InspectorConfig)
        assert result.config.root == str(self.root)
        assert result.config.debug is True
        assert result.config_path == config_path
        assert result.is_default is False
        assert result.warnings == []

    def test_load_config_command_line_only(self):
        result = self.parser.load_config(overrides={'root': str(self.root)})

        assert result.config.root == str(self.root)
        assert result.config_path is None
        assert result.is_default is True

    def test_overrides_take_precedence(self):
        """Test that command-line values replace file values, but None does not."""
        other_root = self.base / "other_out"
        other_root.mkdir()
        config_path = self._write_config({'root': str(other_root), 'debug': True})

        result = self.parser.load_config(config_path, {'root': str(self.root), 'debug': None})

        assert result.config.root == str(self.root)
        assert result.config.debug is True

    def test_default_file_found(self):
        (self.search_dir / ".kphp-inspector.yaml").write_text(f"root: {self.root}\nclass_subdir: cl\n")

        result = self.parser.load_config()

        assert result.config_path == self.search_dir / ".kphp-inspector.yaml"
        assert result.is_default is False

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            self.parser.load_config("/nonexistent/config.yaml")

    def test_load_config_invalid_yaml(self):
        """Test loading configuration with invalid YAML syntax."""
        config_path = self.base / "bad.yaml"
        config_path.write_text("root: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
            self.parser.load_config(config_path)

    def test_load_config_not_an_object(self):
        config_path = self.base / "list.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="must contain a YAML object"):
            self.parser.load_config(config_path)

    def test_load_config_empty_file(self):
        """Test that an empty file is accepted and the root comes from the command line."""
        config_path = self.base / "empty.yaml"
        config_path.write_text("")

        result = self.parser.load_config(config_path, {'root': str(self.root)})
        assert result.config.root == str(self.root)

    def test_missing_root(self):
        with pytest.raises(ConfigurationError, match="invalid --root cmd argument"):
            self.parser.load_config(overrides={'root': None})

    def test_nonexistent_root(self):
        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            self.parser.load_config(overrides={'root': str(self.base / "missing")})

    def test_missing_class_directory_warns(self):
        shutil.rmtree(self.root / "cl")

        result = self.parser.load_config(overrides={'root': str(self.root)})

        assert len(result.warnings) == 1
        assert "Class directory not found" in result.warnings[0]


class TestLoadDiffConfig:
    """Test cases for the tree comparator settings."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.base = Path(self.temp_dir).resolve()
        for name in ("master", "cmp", "diff"):
            (self.base / name).mkdir()

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_valid(self):
        config = load_diff_config(str(self.base / "master"), str(self.base / "cmp"),
                                  str(self.base / "diff"), skip_comments=True)

        assert isinstance(config, DiffConfig)
        assert config.master_root == str(self.base / "master")
        assert config.skip_comments is True
        assert config.header_bytes == 64
        assert config.comment_free_bytes == 30

    @pytest.mark.parametrize("missing,option", [(0, "--master"), (1, "--cmp"), (2, "--diff")])
    def test_missing_argument(self, missing, option):
        args = [str(self.base / name) for name in ("master", "cmp", "diff")]
        args[missing] = None

        with pytest.raises(ConfigurationError, match=f"invalid {option} cmd argument"):
            load_diff_config(*args)

    def test_nonexistent_directory(self):
        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            load_diff_config(str(self.base / "master"), str(self.base / "nope"), str(self.base / "diff"))
