"""
Search and extraction tools for the KPHP Inspector.

This module contains the components that turn a user query into a generated
file: the directory scanner, the candidate locator, the C++ artifact
extractor and the disambiguator.
"""
