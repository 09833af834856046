"""
Expectations: boxes that can verify their subject.

    expect(2 + 2).to_be(4)
    expect(2 + 2).not_.to_be(5)
    wrap({"a": {"b": 3}}).glom("a", "b").apply(lambda x: x * x).to_be(9)

Awaitable subjects get a DeferredExpectation, whose to_be() is a coroutine that
keeps re-reading the subject until it matches or the timeout fires:

    await expect(asyncio.create_task(compute())).to_be(2)
    await eventually(lambda: service.state).within(10).to_be("ready")
"""
import logging

from .boxes import Box
from .equality import deep_equal
from .faults import ExpectationFailedError
from .null import null
from .pending import pending
from .polling import Promise, defaults, poll, resolvable

logger = logging.getLogger(__name__)


class Expectation(Box):
    """
    Box that adds verification (negation + deep equality).
    """

    __slots__ = ("_negate",)

    def __init__(self, entity=null, negate=False, /):
        super().__init__(entity)
        object.__setattr__(self, "_negate", bool(negate))

    def __replace__(self, /, **overrides):
        return type(self)(overrides.get("entity", self._entity), overrides.get("negate", self._negate))

    def _derive(self, entity):
        # Polarity carries over into the deferred tier.
        if resolvable(entity):
            return DeferredExpectation(entity, self._negate)
        return self.__replace__(entity=entity)

    @property
    def negated(self):
        return self._negate

    @property
    def not_(self):
        """
        Expect the opposite; the original expectation is left untouched.
        """
        return self.__replace__(negate=not self._negate)

    def expect(self, key=null, /):
        if self.isempty:
            return super().expect(key)
        if key is null:
            return self
        return self.its(key)

    def to_be(self, expected, /):
        """
        Expect the subject to deep-equal `expected` (a box is unwrapped first).

            expect(2 + 2).to_be(4)
        """
        actual = self.unwrap()
        if isinstance(expected, Box):
            expected = expected.unwrap()
        if deep_equal(actual, expected) == self._negate:
            raise ExpectationFailedError(expected, actual, negated=self._negate)

    def __repr__(self):
        return super().__repr__() + (".not_" if self._negate else "")


class DeferredExpectation(Expectation):
    """
    Expectation over a promise-like subject, verified by polling.

    - unwrap() hands back the awaitable itself (a Promise after navigation steps;
      awaiting it yields the settled value).
    - navigation composes onto the promise and stays deferred, keeping negation and
      polling configuration.
    - to_be() must be awaited.
    """

    __slots__ = ("_promise", "_interval", "_timeout")

    def __init__(self, entity=null, negate=False, /, *, promise=null, interval=null, timeout=null):
        super().__init__(entity, negate)
        if promise is null and entity is not null:
            promise = entity if isinstance(entity, Promise) else Promise(entity)
        object.__setattr__(self, "_promise", promise)
        object.__setattr__(self, "_interval", interval)
        object.__setattr__(self, "_timeout", timeout)

    @classmethod
    def of(cls, entity, /):
        if resolvable(entity):
            return cls(entity)
        return Expectation(entity)

    def __replace__(self, /, **overrides):
        entity = overrides.get("entity", self._entity)
        promise = overrides.get("promise", self._promise if entity is self._entity else null)
        return type(self)(
            entity,
            overrides.get("negate", self._negate),
            promise=promise,
            interval=overrides.get("interval", self._interval),
            timeout=overrides.get("timeout", self._timeout),
        )

    def within(self, timeout=null, /, *, interval=null):
        """
        Copy with its own polling deadline and/or interval (seconds).

            await expect(task).within(10, interval=0.5).to_be(2)
        """
        # Raises TypeError/ValueError for invalid values.
        defaults(interval=interval, timeout=timeout)
        overrides = {}
        if timeout is not null:
            overrides["timeout"] = timeout
        if interval is not null:
            overrides["interval"] = interval
        return self.__replace__(**overrides)

    def apply(self, fn, /):
        self.unwrap()
        promise = self._promise.then(fn)
        return self.__replace__(entity=promise, promise=promise)

    def _holds(self, actual, expected):
        # Two unsettled reads decide nothing in either polarity.
        if actual is pending and expected is pending:
            return False
        return deep_equal(actual, expected) != self._negate

    async def to_be(self, expected, /):
        """
        Poll until the subject deep-equals `expected` (or not, when negated).

            await expect(task).to_be(2)
            await expect(task).not_.to_be(1)

        Raises ExpectationFailedError (timed out) when the deadline passes first.
        Exceptions raised by the subject abort polling immediately.
        """
        self.unwrap()
        interval, timeout = defaults(interval=self._interval, timeout=self._timeout)
        logger.debug("deferred check: %r to %s %r", self, "not be" if self._negate else "be", expected)
        result = await poll(
            self._promise.poll,
            _expression(expected),
            self._holds,
            interval=interval,
            timeout=timeout,
        )
        if not result.passed:
            raise ExpectationFailedError(
                result.expected,
                result.actual,
                negated=self._negate,
                timeout=timeout,
                attempts=result.attempts,
            )


def _expression(expected):
    """
    zero-argument coroutine function producing the expected value for one attempt.
    """
    if isinstance(expected, DeferredExpectation):
        return expected._promise.poll
    if isinstance(expected, Box):
        expected = expected.unwrap()
    if resolvable(expected):
        return Promise(expected).poll

    async def constant():
        return expected
    return constant


def expect(subject=null, /):
    """
    Begin a chain at the expectation level; `subject` is required.
    """
    return Box.empty().expect(subject)


def eventually(expression, /):
    """
    Deferred expectation re-evaluating `expression` (a zero-argument callable,
    possibly returning an awaitable) on every polling attempt.
    """
    return DeferredExpectation(Promise(expression))


__all__ = (
    "Expectation",
    "DeferredExpectation",
    "expect",
    "eventually",
)
