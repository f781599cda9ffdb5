"""
YAML configuration parser for the KPHP Inspector.

This module loads optional YAML configuration files, merges them with
command-line values and validates the result into an immutable
InspectorConfig. Command-line values always take precedence over the file.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..models.config import DiffConfig, InspectorConfig


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        config: The parsed and validated configuration
        warnings: List of non-fatal warnings
        config_path: Path to the configuration file used
        is_default: Whether no configuration file was found
    """
    config: InspectorConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


def _format_validation_error(error: ValidationError) -> str:
    """Turn a pydantic error into a one-line message."""
    messages = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item.get('loc', ())) or 'config'
        messages.append(f"{location}: {item.get('msg')}")
    return '; '.join(messages)


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    Searches the current and home directories for a configuration file when
    none is given explicitly. A missing file is not an error; a file that
    cannot be parsed is.
    """

    DEFAULT_CONFIG_NAMES = [
        '.kphp-inspector.yaml',
        '.kphp-inspector.yml',
        'kphp-inspector.yaml',
    ]

    def __init__(self, search_paths: Optional[List[Path]] = None):
        """
        Initialize the configuration parser.

        Args:
            search_paths: Directories searched for a default configuration file
        """
        self.search_paths = search_paths if search_paths is not None else [Path.cwd(), Path.home()]
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None,
                    overrides: Optional[Dict[str, Any]] = None) -> ConfigParseResult:
        """
        Load configuration from file and command-line overrides.

        Args:
            config_path: Path to configuration file. If None, searches for default files.
            overrides: Values from the command line; None values are ignored

        Returns:
            ConfigParseResult containing parsed configuration and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._load_yaml_file(config_path)
        else:
            config_path, config_data = self._find_and_load_config()

        is_default = config_path is None
        merged = dict(config_data or {})
        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value

        if not merged.get('root'):
            raise ConfigurationError("invalid --root cmd argument: root directory is not specified")

        try:
            config = InspectorConfig.from_dict(merged)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {_format_validation_error(e)}") from e

        warnings = self._get_parser_warnings(config)
        for warning in warnings:
            self.logger.warning(warning)

        self.logger.info(f"Configuration loaded from {config_path or 'command line'}")

        return ConfigParseResult(
            config=config,
            warnings=warnings,
            config_path=config_path,
            is_default=is_default
        )

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        for search_path in self.search_paths:
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.exists() and config_file.is_file():
                    self.logger.info(f"Found configuration file: {config_file}")
                    return config_file, self._load_yaml_file(config_file)

        self.logger.debug("No configuration file found")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)
            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _get_parser_warnings(self, config: InspectorConfig) -> List[str]:
        """Get warnings about a configuration that is valid but looks wrong."""
        warnings = []

        if not config.class_root.is_dir():
            warnings.append(f"Class directory not found: {config.class_root}")

        return warnings


def load_config(config_path: Optional[Union[str, Path]] = None,
                overrides: Optional[Dict[str, Any]] = None) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file (optional)
        overrides: Command-line values taking precedence over the file

    Returns:
        ConfigParseResult containing parsed configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser()
    return parser.load_config(config_path, overrides)


def load_diff_config(master_root: Optional[str], cmp_root: Optional[str], diff_root: Optional[str],
                     skip_comments: bool = False) -> DiffConfig:
    """
    Validate the tree comparator settings.

    Raises:
        ConfigurationError: If any of the directories is missing or invalid
    """
    for value, option in ((master_root, '--master'), (cmp_root, '--cmp'), (diff_root, '--diff')):
        if not value:
            raise ConfigurationError(f"invalid {option} cmd argument")

    try:
        return DiffConfig(
            master_root=master_root,
            cmp_root=cmp_root,
            diff_root=diff_root,
            skip_comments=skip_comments
        )
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {_format_validation_error(e)}") from e
