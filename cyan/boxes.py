"""
Box: the wrapping abstraction every chain starts from.

A box holds exactly one subject (or the `null` sentinel) and exposes navigation
steps that each return a new box around the derived value:

    wrap({"my": {"value": "here"}}).its("my").its("value").unwrap()   # 'here'
    wrap({"my": {"value": "here"}}).glom("my", "value").unwrap()      # 'here'
    wrap(2 + 2).apply(lambda x: x * x).unwrap()                       # 16
    wrap("text").invokes("upper").unwrap()                            # 'TEXT'
    wrap([1, 2, 3]).map(lambda x: x * 2).unwrap()                     # [2, 4, 6]

Tiers
- Navigation keeps the tier it was called on: a Box yields Boxes, an Expectation
  yields Expectations (negation included), a DeferredExpectation stays deferred.
- A promise-like (awaitable) subject always lands in a DeferredExpectation, both
  when wrapped directly and when produced by a navigation step.

Immutability
- Boxes cannot be mutated after construction; derived boxes are built through
  __replace__ so subclasses carry their own state along.
"""
import functools
from collections.abc import Sequence

from .faults import EmptySubjectError, InvalidOperationError
from .null import null
from .paths import lookup, traverse
from .polling import resolvable


def _sequence(operation, subject):
    if isinstance(subject, Sequence) and not isinstance(subject, (str, bytes, bytearray)):
        return subject
    raise InvalidOperationError(
        f"{operation}() requires an ordered sequence subject, not {type(subject).__name__!r}",
        operation,
        subject,
        hint="use apply() to convert the subject first, e.g. apply(list)"
    )


class Box:
    """
    Monad-ish container around a single subject.
    """

    __slots__ = ("_entity",)

    def __init__(self, entity=null, /):
        object.__setattr__(self, "_entity", entity)

    @classmethod
    def of(cls, entity, /):
        """
        Assemble a new box (of this tier) around `entity`.

        Awaitable entities produce a DeferredExpectation instead.
        """
        if resolvable(entity):
            from .expectations import DeferredExpectation
            return DeferredExpectation.of(entity)
        return cls(entity)

    @classmethod
    def empty(cls):
        """
        Get an empty box; unwrapping it fails until something is wrapped.
        """
        return cls(null)

    @property
    def isempty(self):
        return self._entity is null

    def __setattr__(self, name, value, /):
        raise AttributeError(f"'{type(self).__name__}' object is immutable")

    def __delattr__(self, name, /):
        raise AttributeError(f"'{type(self).__name__}' object is immutable")

    def __replace__(self, /, **overrides):
        return type(self)(overrides.get("entity", self._entity))

    def _derive(self, entity):
        # Same tier, new subject; awaitables switch to the deferred tier.
        if resolvable(entity):
            from .expectations import DeferredExpectation
            return DeferredExpectation.of(entity)
        return self.__replace__(entity=entity)

    def unwrap(self):
        """
        Resolve the yielded subject.

            wrap(2 + 2).unwrap()  # 4
        """
        if self.isempty:
            raise EmptySubjectError(
                "An empty box cannot be unwrapped.",
                hint="wrap a subject first, e.g. wrap(value) or expect(value)"
            )
        return self._entity

    def wrap(self, entity, /):
        """
        Yield an arbitrary subject, starting over at this tier.
        """
        return self.of(entity)

    def apply(self, fn, /):
        """
        Pass the subject to `fn`, yielding the result.

            wrap(2 + 2).apply(lambda x: x * x).unwrap()  # 16
        """
        return self._derive(fn(self.unwrap()))

    def its(self, key, /):
        """
        Yield a named property (or index) of the subject; None when it is missing.
        """
        return self.apply(lambda subject: lookup(subject, key))

    def glom(self, *path):
        """
        Yield a nested property of the subject, following `path` key by key.

            wrap({"my": {"value": "here"}}).glom("my", "value").unwrap()  # 'here'
            wrap({}).glom("my", "value").unwrap()                         # None
        """
        return self.apply(lambda subject: traverse(subject, path))

    def invokes(self, key, /, *args, **kwargs):
        """
        Yield the result of calling the named method of the subject.
        """
        def invoke(subject):
            method = lookup(subject, key)
            if not callable(method):
                raise InvalidOperationError(
                    f"invokes() target {key!r} is not callable on {type(subject).__name__!r}",
                    "invokes",
                    subject,
                    hint="use its() to read plain properties"
                )
            return method(*args, **kwargs)
        return self.apply(invoke)

    def map(self, fn, /):
        """
        Yield the list of `fn` applied to each element of the (sequence) subject.
        """
        return self.apply(lambda subject: [fn(element) for element in _sequence("map", subject)])

    each = map

    def filter(self, predicate, /):
        """
        Yield the elements of the (sequence) subject for which `predicate` is truthy, in order.
        """
        return self.apply(lambda subject: [element for element in _sequence("filter", subject) if predicate(element)])

    def reduce(self, fn, initial=null, /):
        """
        Fold the (sequence) subject with `fn`, optionally starting from `initial`.
        """
        def fold(subject):
            elements = _sequence("reduce", subject)
            if initial is null:
                return functools.reduce(fn, elements)
            return functools.reduce(fn, elements, initial)
        return self.apply(fold)

    def expect(self, key=null, /):
        """
        Claim an expectation on the yielded value.

        - on an empty box, `key` is taken as the subject to verify (expect(value) entry point);
          without it an EmptySubjectError is raised.
        - otherwise `key` (optional) names the property of the subject to verify.
        """
        from .expectations import Expectation

        if self.isempty:
            if key is null:
                raise EmptySubjectError(
                    "expect() called without arguments on empty box.",
                    hint="provide an argument as the subject to verify against"
                )
            return Expectation.of(key)
        if key is not null:
            return Expectation.of(self.its(key).unwrap())
        return Expectation.of(self.unwrap())

    def to_be(self, expected, /):
        """
        Shorthand for expect().to_be(expected).
        """
        return self.expect().to_be(expected)

    @property
    def not_(self):
        """
        Shorthand for expect().not_.
        """
        return self.expect().not_

    def __repr__(self):
        return f"{type(self).__name__}({self._entity!r})"


def wrap(subject, /):
    """
    Begin a chain around `subject`.
    """
    return Box.of(subject)


__all__ = (
    "Box",
    "wrap",
)
