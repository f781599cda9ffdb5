"""
KPHP Inspector - Core Package

Console tools to locate and examine C++ sources generated by KPHP
from PHP functions and classes, and to compare two generated trees.
"""

__version__ = "1.0.0"
__author__ = "KPHP Inspector Team"
