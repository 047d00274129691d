"""
Dotted-path reads and writes on nested mappings.

``set_path_value("address.city", "Oslo", target)`` writes
``target["address"]["city"]``, creating intermediate dicts as needed.

Collision policy: the last write wins at the leaf. Writing through an
intermediate value that is not a mapping replaces it with a new dict, so
defining both ``"a"`` and ``"a.b"`` keeps whichever is written last.
"""

from typing import Any, List, Mapping, MutableMapping, Optional

_MISSING = object()


def split_path(path: str, separator: str = ".") -> List[str]:
    """Split a dotted path into its segments."""
    if not isinstance(path, str):
        raise TypeError(f"Attribute path must be a string, got {type(path).__name__}")
    return path.split(separator)


def set_path_value(
    path: str,
    value: Any,
    target: MutableMapping[str, Any],
    separator: str = ".",
) -> MutableMapping[str, Any]:
    """
    Write ``value`` into ``target`` at ``path``.

    Args:
        path: Dotted location, e.g. ``"address.city"``
        value: Value to store at the leaf
        target: Mapping to write into; modified in place
        separator: Segment separator

    Returns:
        ``target``
    """
    *parents, leaf = split_path(path, separator)

    node = target
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            node[segment] = child
        node = child

    node[leaf] = value
    return target


def get_path_value(
    path: str,
    source: Any,
    default: Optional[Any] = None,
    separator: str = ".",
) -> Any:
    """
    Read the value at ``path`` from nested mappings or attributes.

    Returns ``default`` when any segment is missing.
    """
    node = source
    for segment in split_path(path, separator):
        if isinstance(node, Mapping):
            node = node.get(segment, _MISSING)
        else:
            node = getattr(node, segment, _MISSING)
        if node is _MISSING:
            return default
    return node


def merge_mappings(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict:
    """
    Return a new dict of ``base`` updated with ``overrides``.

    Nested mappings present on both sides are merged recursively; any other
    override value replaces the base value. Neither input is modified.
    """
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_mappings(current, value)
        else:
            merged[key] = value
    return merged
