"""
Shared helpers for the KPHP Inspector.
"""
