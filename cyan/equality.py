"""
Structural (deep) equality used by every expectation.

Rules
- identical objects are equal.
- mappings compare by key set, then value by value.
- ordered sequences (except str/bytes/bytearray) compare by length, then element
  by element; a list and a tuple with equal elements are deep-equal.
- sets compare with ==.
- two instances of the same class that keep the default object.__eq__ compare
  their attribute dictionaries.
- everything else falls back to ==.

Self-referencing structures are handled: a pair of containers already under
comparison is assumed equal while its members are checked.
"""
from collections.abc import Mapping, Sequence, Set

_SCALARS = (str, bytes, bytearray)


def _sequence(object):
    return isinstance(object, Sequence) and not isinstance(object, _SCALARS)


def _compare(left, right, seen):
    if left is right:
        return True

    pair = (id(left), id(right))
    if pair in seen:
        return True

    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if len(left) != len(right) or left.keys() != right.keys():
            return False
        seen.add(pair)
        return all(_compare(left[key], right[key], seen) for key in left)

    if _sequence(left) and _sequence(right):
        if len(left) != len(right):
            return False
        seen.add(pair)
        return all(_compare(one, other, seen) for one, other in zip(left, right))

    if isinstance(left, Set) and isinstance(right, Set):
        return left == right

    # Plain records without their own __eq__ compare field by field.
    if (
        type(left) is type(right) and
        type(left).__eq__ is object.__eq__ and
        hasattr(left, "__dict__")
    ):
        seen.add(pair)
        return _compare(vars(left), vars(right), seen)

    return bool(left == right)


def deep_equal(left, right, /):
    """
    Return True when `left` and `right` are structurally equal.

    examples
    - deep_equal({"a": [1, 2]}, {"a": [1, 2]})  → True
    - deep_equal([1, 2], (1, 2))                → True
    - deep_equal({"a": 1}, {"a": 1, "b": None}) → False
    """
    return _compare(left, right, set())


__all__ = ("deep_equal",)
