"""
Cyan faults (errors raised by links and expectations) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault. Codes are
  grouped by domain (subject access, navigation, verification) to keep logs and
  searches predictable.
- CyanException: base type carrying message + hint that knows how to render
  itself through rich (`__rich__`) and plainly through str().
- EmptySubjectError / InvalidOperationError / ExpectationFailedError: the three
  fault kinds a chain can raise.

Propagation
- Faults are raised where they are detected and never caught by the library;
  the polling loop of deferred expectations only retries failed comparisons.
- ExpectationFailedError is also an AssertionError and InvalidOperationError is
  also a TypeError, so test runners and callers can treat them natively.

Host customization (read from __main__)
- __codes__: mapping FaultCode → label used by FaultCode.normalize().
- __styles__: mapping of style names (see CyanException.__styles__) to rich styles.
"""
from collections import defaultdict
from enum import IntEnum

from rich.console import Group
from rich.pretty import pretty_repr
from rich.text import Text

from .null import null


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - subject access (2110x)
      • EMPTY_SUBJECT
    - navigation (2111x)
      • INVALID_OPERATION
    - verification (2112x)
      • EXPECTATION_FAILED, EXPECTATION_TIMED_OUT

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired (e.g., to shorter labels).
    """
    # --- subject access (21xxx) ---
    EMPTY_SUBJECT               = 21101

    # --- navigation (21xxx) ---
    INVALID_OPERATION           = 21111

    # --- verification (21xxx) ---
    EXPECTATION_FAILED          = 21121
    EXPECTATION_TIMED_OUT       = 21122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def serialize(value, /):
    """
    stringify a subject for failure messages (rich pretty repr, single line when it fits).
    """
    return pretty_repr(value, max_width=120)


class CyanException(Exception):
    code = None
    title = "fault"

    __styles__ = {
        # header parts
        "code": "bold #00E5FF",  # neon cyan fault code
        "title": "bold #FF4DA6",  # friendly pinky title

        # body
        "message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    }

    def __init__(self, message, /, *, hint=null):
        super().__init__(message)
        self.message = message
        self.hint = null.nullify(hint)

    def styles(self):
        return defaultdict(str, self.__styles__ | getattr(__import__("__main__"), "__styles__", {}))

    def header(self, styles):
        return Text.assemble(
            "[ ",
            (self.code.normalize(), styles["code"]),
            " | ",
            (self.title.title(), styles["title"]),
            " ]"
        )

    def body(self, styles):
        return Text(self.message, styles["message"])

    def __rich__(self):
        styles = self.styles()
        renders = [self.header(styles), self.body(styles)]
        if self.hint:
            renders.append(Text.assemble((" → ", styles["hint-arrow"]), (self.hint, styles["hint"])))
        return Group(*renders)

    def __str__(self):
        if self.hint:
            return f"{self.message}\n → {self.hint}"
        return self.message


class EmptySubjectError(CyanException):
    code = FaultCode.EMPTY_SUBJECT
    title = "empty subject"


class InvalidOperationError(CyanException, TypeError):
    code = FaultCode.INVALID_OPERATION
    title = "invalid operation"

    def __init__(self, message, /, operation, subject, *, hint=null):
        super().__init__(message, hint=hint)
        self.operation = operation
        self.subject = subject


class ExpectationFailedError(CyanException, AssertionError):
    """
    a (possibly negated) deep-equality check did not hold.

    attributes
    - expected / actual: the compared values (actual is the last observed read
      for deferred checks, possibly `pending`).
    - claim: the asserted relation, e.g. "be deep equal".
    - negated: polarity of the check; rendered as "not <claim>".
    - timeout / attempts: set (seconds / count) when a deferred check ran out of time.
    """
    title = "expectation failed"

    __styles__ = CyanException.__styles__ | {
        "failure": "bold red",
        "prose": "grey50",
        "claim": "green",
        "expected": "blue",
        "actual": "magenta",
    }

    def __init__(self, expected, actual, /, *, claim="be deep equal", negated=False, timeout=null, attempts=null):
        self.expected = expected
        self.actual = actual
        self.claim = claim
        self.negated = negated
        self.timeout = null.nullify(timeout)
        self.attempts = null.nullify(attempts)
        super().__init__("\n\n".join((self.headline, "".join(text for text, _ in self.fragments()))))

    @property
    def code(self):
        if self.timeout is None:
            return FaultCode.EXPECTATION_FAILED
        return FaultCode.EXPECTATION_TIMED_OUT

    @property
    def polarity(self):
        return f"not {self.claim}" if self.negated else self.claim

    @property
    def headline(self):
        if self.timeout is None:
            return "Expectation failed!"
        return f"Expectation timed out after {self.timeout:g}s!"

    def fragments(self):
        """
        (text, style-name) pairs composing the sentence under the headline.
        """
        if self.timeout is None:
            return [
                ("Expected yielded value to ", "prose"),
                (self.polarity, "claim"),
                (" to ", "prose"),
                (serialize(self.expected), "expected"),
                (" but got ", "prose"),
                (serialize(self.actual), "actual"),
                (" instead.", "prose"),
            ]
        return [
            ("Expected eventual value to ", "prose"),
            (self.polarity, "claim"),
            (" to ", "prose"),
            (serialize(self.expected), "expected"),
            (" but last got ", "prose"),
            (serialize(self.actual), "actual"),
            (f" instead ({self.attempts} attempts).", "prose"),
        ]

    def body(self, styles):
        return Text.assemble(
            (self.headline, styles["failure"]),
            "\n\n",
            *((text, styles[style]) for text, style in self.fragments())
        )


__all__ = (
    "FaultCode",
    "CyanException",
    "EmptySubjectError",
    "InvalidOperationError",
    "ExpectationFailedError",
)
