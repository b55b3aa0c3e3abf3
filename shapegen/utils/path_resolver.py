"""
Dotted-path lookup into seed trees and in-progress result trees
"""
from collections.abc import Mapping
from typing import Any, List, Optional

# Scalars and strings are never traversed as records
_LEAF_TYPES = (str, bytes, int, float, bool)


def split_path(path: Optional[str]) -> List[str]:
    """Split a dotted path, dropping empty and wildcard segments"""
    if not path:
        return []
    return [segment for segment in path.split('.') if segment and segment != '*']


def join_path(parent: str, name: str) -> str:
    """Append a segment to a dotted path"""
    return f"{parent}.{name}" if parent else name


def parent_path(path: str) -> str:
    """Dotted path of the enclosing node, '' for top-level fields"""
    return path.rsplit('.', 1)[0] if '.' in path else ''


def _step(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment)
    if isinstance(node, (list, tuple, set)) or isinstance(node, _LEAF_TYPES):
        return None
    if hasattr(node, '__dict__') or hasattr(node, '__slots__'):
        return getattr(node, segment, None)
    return None


def _traverse(root: Any, path: Optional[str]) -> Any:
    node = root
    for segment in split_path(path):
        if node is None:
            return None
        node = _step(node, segment)

    if isinstance(node, (list, tuple, set)):
        return list(node)
    return node


def resolve_seed_path(seed: Any, path: Optional[str]) -> Any:
    """
    Look up the seed value at a dotted path.

    Missing keys, scalar intermediates and a None seed all resolve to None.
    Terminal sequences are returned as lists.
    """
    if seed is None:
        return None
    return _traverse(seed, path)


def resolve_linked_path(result: Any, path: Optional[str]) -> Any:
    """Look up an already generated value in a result tree, None when absent"""
    if result is None:
        return None
    return _traverse(result, path)
