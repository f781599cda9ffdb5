"""
Configuration data models for the KPHP Inspector.

This module defines the settings established once at startup: the root of the
codegenerated tree, the generator's file naming conventions, and the settings
of the tree comparator. Both models are frozen; components receive them
explicitly and never mutate them.
"""

from typing import Dict, Any
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_directory(value: str, what: str) -> str:
    """Normalize a directory path and ensure it exists."""
    if not value or not value.strip():
        raise ValueError(f"{what} directory must be specified")

    path = Path(value.strip()).expanduser().resolve()
    if not path.exists():
        raise ValueError(f"{what} directory does not exist: {path}")
    if not path.is_dir():
        raise ValueError(f"{what} path is not a directory: {path}")

    return str(path)


class InspectorConfig(BaseModel):
    """
    Main configuration of the inspector.

    Attributes:
        root: Full path to the codegenerated C++ sources
        class_subdir: Subdirectory of root holding class declaration headers
        class_file_prefix: File name prefix of class headers inside class_subdir
        source_extension: Extension of translation units
        header_extension: Extension of headers
        debug: Whether debug logging is enabled
    """

    model_config = ConfigDict(frozen=True)

    root: str = Field(..., description="Root directory of codegenerated C++ sources")
    class_subdir: str = Field("cl", min_length=1, description="Subdirectory with class headers")
    class_file_prefix: str = Field("C@", description="File name prefix of class headers")
    source_extension: str = Field(".cpp", description="Extension of translation units")
    header_extension: str = Field(".h", description="Extension of headers")
    debug: bool = Field(False, description="Enable debug logging")

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Validate and normalize the root directory."""
        return _validate_directory(v, "Root")

    @field_validator('source_extension', 'header_extension')
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Normalize extension to include leading dot."""
        if not v.startswith('.'):
            return '.' + v
        return v

    @property
    def root_path(self) -> Path:
        return Path(self.root)

    @property
    def class_root(self) -> Path:
        """Directory where class declaration headers live."""
        return self.root_path / self.class_subdir

    @property
    def class_path_marker(self) -> str:
        """Path fragment identifying a class declaration header, e.g. 'cl/C@'."""
        return f"{self.class_subdir}/{self.class_file_prefix}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InspectorConfig':
        """Create an InspectorConfig instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        return f"InspectorConfig(root={self.root}, debug={self.debug})"


class DiffConfig(BaseModel):
    """
    Configuration of the tree comparator.

    Attributes:
        master_root: Generated tree produced by the stable compiler
        cmp_root: Generated tree produced by the modified compiler
        diff_root: Output directory for diffs and copies of differing files
        skip_comments: Do not write diffs for files differing only in comments
        header_bytes: Number of leading bytes compared to decide whether files differ
        comment_free_bytes: Leading bytes that exclude the comments checksum
    """

    model_config = ConfigDict(frozen=True)

    master_root: str = Field(..., description="Root of the master (reference) tree")
    cmp_root: str = Field(..., description="Root of the compared tree")
    diff_root: str = Field(..., description="Directory for detailed diffs")
    skip_comments: bool = Field(False, description="Skip comment-only differences")
    header_bytes: int = Field(64, gt=0, description="Leading bytes compared per file")
    comment_free_bytes: int = Field(30, gt=0, description="Leading bytes without comments checksum")

    @field_validator('master_root')
    @classmethod
    def validate_master_root(cls, v: str) -> str:
        return _validate_directory(v, "Master")

    @field_validator('cmp_root')
    @classmethod
    def validate_cmp_root(cls, v: str) -> str:
        return _validate_directory(v, "Compared")

    @field_validator('diff_root')
    @classmethod
    def validate_diff_root(cls, v: str) -> str:
        return _validate_directory(v, "Diff")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()
