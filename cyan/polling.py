"""
cyan.polling
~~~~~~~~~~~~

Retry primitive behind deferred expectations, plus the promise-like model it reads from.

What this module provides
- resolvable(value): the explicit "is this promise-like" check used at every boundary
  where a subject enters a chain (awaitables are promise-like).
- Promise: a subject-producing expression. Wraps an awaitable (scheduled once, read
  without blocking) or a zero-argument callable (re-invoked on every read), and
  derives new promises with then(fn) so navigation can be composed before the value
  exists.
- poll(actual, expected, predicate): evaluates a fresh actual/expected pair on every
  attempt, sleeping between attempts, until the predicate holds or the deadline passes.
- defaults(): resolve the polling interval and timeout.

State machine
- Every poll() call starts POLLING and ends PASSED or TIMED_OUT; the terminal state is
  reported in the returned Poll record (raising is left to the caller).
- Exceptions raised while reading actual/expected abort the poll and propagate.
- A single read that outlives the deadline is cut off and counts as TIMED_OUT.

Configuration
- Built-in defaults are INTERVAL (0.1s) and TIMEOUT (4.0s).
- The host application can provide a __polling__ mapping in __main__, e.g.
    __polling__ = {"interval": 0.05, "timeout": 10}
- Explicit arguments always win over the host mapping.
"""
import asyncio
import enum
import inspect
import logging
from numbers import Real
from typing import Any, NamedTuple

from .null import null
from .pending import pending

logger = logging.getLogger(__name__)

INTERVAL = 0.1
TIMEOUT = 4.0


def resolvable(value, /):
    """
    Return True when `value` is promise-like (can be awaited).
    """
    return inspect.isawaitable(value)


async def _settle(value):
    if resolvable(value):
        return await value
    return value


class Promise:
    """
    A subject that may still be in flight.

    sources
    - awaitable: scheduled with asyncio.ensure_future on first use (inside the running
      loop) and shared by every read and every derived promise afterwards.
    - callable: invoked on every read; an awaitable result is awaited.

    reads
    - await promise.poll()  → the current value, or `pending` while unsettled.
    - await promise         → waits for the value to settle.
    """

    __slots__ = ("_source", "_parent", "_task")

    def __init__(self, source, /, *, parent=None):
        if not (resolvable(source) or callable(source)):
            raise TypeError("Promise() argument must be awaitable or callable")
        self._source = source
        self._parent = parent
        self._task = None

    def _schedule(self):
        if self._task is None:
            self._task = asyncio.ensure_future(self._source)
        return self._task

    @property
    def derived(self):
        return self._parent is not None

    def then(self, transform, /):
        """
        Derive a promise whose reads apply `transform` to this promise's settled reads.
        """
        return Promise(transform, parent=self)

    async def poll(self):
        if self._parent is not None:
            value = await self._parent.poll()
            if value is pending:
                return pending
            return await _settle(self._source(value))
        if not resolvable(self._source):
            return await _settle(self._source())
        task = self._schedule()
        if not task.done():
            return pending
        return task.result()

    async def settle(self):
        if self._parent is not None:
            return await _settle(self._source(await self._parent.settle()))
        if not resolvable(self._source):
            return await _settle(self._source())
        return await self._schedule()

    def __await__(self):
        return self.settle().__await__()

    def __repr__(self):
        if self._task is not None and self._task.done() and not self._task.cancelled():
            if self._task.exception() is None:
                return f"Promise(settled={self._task.result()!r})"
        if self._parent is not None:
            return f"Promise(then={self._source!r}, parent={self._parent!r})"
        return f"Promise({self._source!r})"


class PollState(enum.Enum):
    POLLING = "polling"
    PASSED = "passed"
    TIMED_OUT = "timed out"


class Poll(NamedTuple):
    state: PollState
    actual: Any
    expected: Any
    attempts: int
    elapsed: float

    @property
    def passed(self):
        return self.state is PollState.PASSED


def _seconds(name, value, /, *, strict):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"polling {name} must be a number of seconds")
    if value < 0 or (strict and value == 0):
        raise ValueError(f"polling {name} must be a {'positive' if strict else 'non-negative'} number of seconds")
    return float(value)


def defaults(*, interval=null, timeout=null):
    """
    Resolve (interval, timeout) in seconds.

    precedence
    - explicit keyword arguments (anything but `null`).
    - __main__.__polling__ mapping ("interval" / "timeout" keys).
    - INTERVAL / TIMEOUT.

    errors
    - TypeError for non-numbers, ValueError for a non-positive interval or a negative timeout.
    """
    host = getattr(__import__("__main__"), "__polling__", {})
    interval = null.nullify(interval, host.get("interval", INTERVAL))
    timeout = null.nullify(timeout, host.get("timeout", TIMEOUT))
    return _seconds("interval", interval, strict=True), _seconds("timeout", timeout, strict=False)


async def poll(actual, expected, predicate, /, *, interval=null, timeout=null):
    """
    Evaluate `predicate(await actual(), await expected())` until it holds or time runs out.

    Parameters
    - actual / expected: zero-argument async callables producing a fresh read per attempt.
    - predicate: (actual, expected) → truthy when the attempt passes.
    - interval / timeout: seconds; see defaults().

    Returns
    - Poll record; `state` is PASSED on the first passing attempt, TIMED_OUT when the
      deadline passed first. `actual`/`expected` are the last values read.
    """
    interval, timeout = defaults(interval=interval, timeout=timeout)
    loop = asyncio.get_running_loop()
    start = loop.time()
    deadline = start + timeout
    state = PollState.POLLING
    observed = wanted = pending
    attempts = 0

    while state is PollState.POLLING:
        attempts += 1
        scope = asyncio.timeout_at(deadline)
        try:
            async with scope:
                observed = await actual()
                wanted = await expected()
        except TimeoutError:
            if not scope.expired():
                raise
            logger.debug("poll attempt %d cut off by the %gs deadline", attempts, timeout)
            state = PollState.TIMED_OUT
            break

        logger.debug("poll attempt %d: got %r, expected %r", attempts, observed, wanted)
        if predicate(observed, wanted):
            state = PollState.PASSED
        elif (remaining := deadline - loop.time()) <= 0:
            state = PollState.TIMED_OUT
        else:
            await asyncio.sleep(min(interval, remaining))

    elapsed = loop.time() - start
    logger.debug("poll %s after %d attempts (%.3fs)", state.value, attempts, elapsed)
    return Poll(state, observed, wanted, attempts, elapsed)


__all__ = (
    "INTERVAL",
    "TIMEOUT",
    "resolvable",
    "Promise",
    "PollState",
    "Poll",
    "defaults",
    "poll",
)
