"""
Search query data model for the KPHP Inspector.

A query is what the user typed after a console command: either a fully
qualified PHP name starting with a backslash ("\\VK\\Feed\\Post::analyze") or
free-form words ("post analyze"). This module turns it into search tokens and,
for fully qualified names, into the generator's file naming scheme.
"""

import re
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


NAMESPACE_SEPARATOR = '\\'
METHOD_SEPARATOR = '::'
FILE_NAME_MARKER = '@'

_TOKEN_SPLIT_RE = re.compile(r'[\\,+\s:()]')


def split_query(raw: str) -> List[str]:
    """
    Split a free-form query into lower-cased tokens.

    "ClassName::method" gives ['classname', 'method'],
    "VK Feed something" gives ['vk', 'feed', 'something'].

    Args:
        raw: Query text as typed by the user

    Returns:
        Non-empty tokens in the order they were typed
    """
    parts = _TOKEN_SPLIT_RE.split(raw.lower().strip())
    return [part for part in parts if part]


def to_generator_path(fqn: str) -> str:
    """
    Convert a fully qualified PHP name into the generator's file name stem.

    "\\VK\\Feed\\Post::analyze" gives "VK@Feed@Post@@analyze". A trailing "()"
    is ignored, so "\\Full\\FQN::method()" is accepted as well.

    Args:
        fqn: Fully qualified name, with or without the leading separator

    Returns:
        File name fragment without separators
    """
    name = fqn.strip()
    if name.startswith(NAMESPACE_SEPARATOR):
        name = name[1:]
    if name.endswith('()'):
        name = name[:-2]

    name = name.replace(METHOD_SEPARATOR, FILE_NAME_MARKER * 2)
    return name.replace(NAMESPACE_SEPARATOR, FILE_NAME_MARKER).replace(':', FILE_NAME_MARKER)


class SearchQuery(BaseModel):
    """
    Represents a user query, immutable once parsed.

    Attributes:
        raw: Query text as typed by the user
    """

    model_config = ConfigDict(frozen=True)

    raw: str = Field(..., description="Query text as typed by the user")

    @field_validator('raw')
    @classmethod
    def validate_raw(cls, v: str) -> str:
        """Trim surrounding whitespace; an empty query is allowed and matches nothing."""
        return v.strip()

    @property
    def is_fully_qualified(self) -> bool:
        """Whether the query names an exact symbol, e.g. "\\VK\\Post::analyze"."""
        return self.raw.startswith(NAMESPACE_SEPARATOR)

    @property
    def tokens(self) -> List[str]:
        """Lower-cased search tokens used for word-boundary matching."""
        return split_query(self.raw)

    @property
    def longest_token(self) -> Optional[str]:
        """The longest token (first one on ties), used to seed the directory scan."""
        tokens = self.tokens
        if not tokens:
            return None
        return max(tokens, key=len)

    @property
    def generator_path(self) -> Optional[str]:
        """File name stem of a fully qualified query, None for fuzzy queries."""
        if not self.is_fully_qualified:
            return None
        return to_generator_path(self.raw)

    def is_empty(self) -> bool:
        return not self.tokens

    def __str__(self) -> str:
        return self.raw
