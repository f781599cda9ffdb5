"""
Comparison of two KPHP output trees.
"""

from .comparator import DiffInvoker, DiffSummary, TreeComparator

__all__ = ['DiffInvoker', 'DiffSummary', 'TreeComparator']
