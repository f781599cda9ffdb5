"""
Data models for the KPHP Inspector.

This module contains all the core data structures used throughout the system.
"""

from .search_query import SearchQuery
from .artifacts import ArtifactKind, ClassArtifact, FunctionArtifact, VarDecl
from .config import DiffConfig, InspectorConfig

__all__ = [
    'SearchQuery',
    'ArtifactKind',
    'ClassArtifact',
    'FunctionArtifact',
    'VarDecl',
    'DiffConfig',
    'InspectorConfig',
]
