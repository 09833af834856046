"""
Key lookup and path traversal over arbitrary subjects.

Both helpers are total: a missing key, an out-of-range index or an
unsubscriptable value yields None instead of raising, so a chain can glom
through partially populated structures and assert on the absence.

Lookup rules (first match wins)
- None subject         → None
- Mapping holding key  → subject[key] (None for unhashable keys)
- str key naming an attribute → getattr(subject, key) (methods come back bound)
- anything else        → subject[key], None on LookupError/TypeError

Mapping entries shadow attributes: {"keys": 1} reads 1 for "keys", while
{"a": 1} still hands back its bound keys() method.
"""
import functools
from collections.abc import Mapping


def lookup(subject, key, /):
    """
    Read one key off `subject`.

    examples
    - lookup({"a": 1}, "a")        → 1
    - lookup({"a": 1}, "b")        → None
    - lookup({"a": 1}, ["a"])      → None
    - lookup({"a": 1}, "keys")     → bound method dict.keys
    - lookup([1, 2, 3], 0)         → 1
    - lookup("text", "upper")      → bound method str.upper
    """
    if subject is None:
        return None
    if isinstance(subject, Mapping):
        try:
            found = key in subject
        except TypeError:
            return None
        if found:
            return subject[key]
    if isinstance(key, str) and hasattr(subject, key):
        return getattr(subject, key)
    try:
        return subject[key]
    except (LookupError, TypeError):
        return None


def traverse(root, path, /):
    """
    Walk `path` (an ordered sequence of keys) through `root`.

    Short-circuits to None as soon as an intermediate value is None.
    An empty path yields `root` itself.
    """
    return functools.reduce(lambda result, key: None if result is None else lookup(result, key), path, root)


__all__ = (
    "lookup",
    "traverse",
)
