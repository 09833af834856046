"""
Empty-subject sentinel (implementation detail).

This module defines a process-wide singleton `null` and its type `nulltype`.
A box holding `null` has no subject yet: unwrapping it fails, and expect()
on it needs an explicit argument. It is never reachable as ordinary data,
so it stays distinct from None, 0, "" or empty collections, which are all
legitimate subjects.

Important
- The sentinel is checked by identity (`entity is null`), never by truthiness.
- Semantics:
  • Falsy: bool(null) is False.
  • Stable string form: repr(null) == "null" (and Rich uses a dim style).
  • Identity: nulltype() always returns the same instance per interpreter.

Typical internal usage
- Use it as the "not provided" default where None is a meaningful argument:
    def expect(self, key=null, /):
        if key is null:
            ...
- Use `nullify(object, default)` to coerce the sentinel to a real default while
  passing through normal objects unchanged.
"""
import functools

from rich.text import Text


class nulltype:
    """
    Singleton type representing "no subject".

    Notes
    - This type is final; subclassing is blocked to preserve semantics.
    - Instances are singletons per interpreter process. Calling nulltype()
      repeatedly yields the same object, copies and unpickled copies included.
    - The instance is falsy and has a stable string/console representation.
    """

    @functools.cache
    def __new__(cls):
        """
        Return the unique instance of nulltype (per process).
        """
        return super().__new__(cls)

    def nullify(self, object, default=None, /):
        """
        Replace the sentinel with a concrete default; pass through other objects.

        Parameters
        - object: any
          Value that may be the sentinel instance (self).
        - default: any | None
          Replacement object when `object` is the sentinel. Defaults to None.

        Returns
        - default when `object is self`, otherwise `object` unchanged.
        """
        if object is self:
            return default
        # None and every other falsy value are preserved.
        return object

    def __bool__(self):
        return False

    def __reduce__(self):
        # Unpickling calls nulltype() again, which hands back the cached instance.
        return type(self), ()

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __rich__(self):
        """
        Rich protocol hook: render a dim 'null' token for human-friendly output.
        """
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "null"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'nulltype' is not an acceptable base type")


# Module-level singleton.
null = nulltype()


__all__ = (
    "nulltype",
    "null",
)
