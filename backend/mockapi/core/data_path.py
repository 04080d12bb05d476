"""Deep-Path Extraction — walks a parsed document to the node at a dot/slash path.

Invariants:
    - PURE and total: never raises, returns MISSING when no node corresponds to the path
    - Returns the node itself (identity), never a copy
    - Empty path (or only separators) addresses the root
    - Mappings walked by key (non-string keys compared by their str() form),
      sequences by non-negative ASCII integer index

Design Decisions:
    - Explicit MISSING over None: a stored null is data, an absent node is a lookup miss
      (ADR: caller treats "path not found" like "file not found")
    - Iterative walk: documents are shallow, no recursion needed
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from mockapi.core.domain_types import MISSING

_SEPARATORS = re.compile(r"[./]")


def split_data_path(data_path: str | None) -> list[str]:
    """Split "a.b/0.c" into ["a", "b", "0", "c"]."""
    if not data_path:
        return []
    return [part for part in _SEPARATORS.split(data_path) if part]


def extract_sub_value(data_path: str | None, root: Any) -> Any:
    """Node at data_path inside root, or MISSING."""
    node = root
    for part in split_data_path(data_path):
        node = _step(node, part)
        if node is MISSING:
            return MISSING
    return node


def _step(node: Any, part: str) -> Any:
    if isinstance(node, Mapping):
        if part in node:
            return node[part]
        # YAML loads "1:" as an int key; path parts are always strings
        for key in node:
            if str(key) == part:
                return node[key]
        return MISSING
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        if part.isdecimal() and part.isascii() and int(part) < len(node):
            return node[int(part)]
        return MISSING
    return MISSING
