# python
"""
Sentinel for awaitables that have not settled yet.

This module exposes a single instance: `pending`. A deferred expectation reads its
subject without blocking; while the underlying awaitable is still running the read
yields `pending` instead of a value. It is falsy, deep-equal only to itself,
pretty-prints as "(pending)" and renders with colors in Rich.

Common patterns (for internal use)
- Short-circuit derived reads:
    value = await parent.poll()
    if value is pending:
        return pending

Notes
- `pending` is a cached singleton (per-process).
- Rich rendering uses Text.assemble for a colored "(pending)".
"""
from rich.text import Text

# Produced by Promise.poll() while the awaitable is still in flight. Failure
# messages show it verbatim so a timed out check says what was last observed.
pending = type("pending-type", (), {
    "__module__": None,
    "__slots__": (),
    "__rich__": lambda self: Text.assemble(("(", "yellow"), ("pending", "cyan"), (")", "yellow")),
    "__repr__": lambda self: "(pending)",
    "__bool__": lambda self: False,
    "__doc__": "singleton read from an awaitable that has not settled yet",
    # Cache the singleton creation so repeated instantiation returns the same object.
    "__new__": __import__("functools").cache(lambda cls: super(type, cls).__new__(cls)),
    "__copy__": lambda self: self,
    "__deepcopy__": lambda self, memo: self,
})()


__all__ = ("pending",)
