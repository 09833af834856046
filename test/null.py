"""
Tests for the null singleton.

This module verifies semantic guarantees of the `nulltype` sentinel that marks
an empty box:
- Singleton identity (single instance per interpreter process).
- Falsy semantics and string/representation behavior.
- Rich rendering integration.
- Copying, deep copying, pickling, and thread safety properties.
- Finality (type cannot be subclassed).
- nullify() substitution.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from cyan.null import *


class NullTest(TestCase):
    """
    Test suite for the `nulltype` singleton.
    """

    def setUp(self) -> None:
        """
        Prepare a fresh reference to the singleton and its type for each test.
        """
        self.null: nulltype = nulltype()
        self.nulltype: type[nulltype] = nulltype

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(self.null, self.nulltype())

    def testModuleSingleton(self) -> None:
        """
        The exported `null` matches the constructed singleton instance.
        """
        self.assertIs(null, self.null)
        self.assertIs(null, self.nulltype())

    def testHashAndSetUniqueness(self) -> None:
        """
        Hash is stable and set semantics deduplicate the singleton.
        """
        set = {self.null, self.nulltype()}
        self.assertEqual(len(set), 1)
        self.assertEqual(hash(self.null), hash(self.nulltype()))

    def testRich(self) -> None:
        """
        __rich__() returns a dim-styled Text 'null'.
        """
        self.assertEqual(self.null.__rich__(), Text("null", style="dim"))

    def testRichConsolePrint(self) -> None:
        """
        Console.print(...) renders 'null' without ANSI when color is disabled.
        """
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(self.null)
        self.assertEqual(capture.get().strip(), "null")

    def testRepr(self) -> None:
        """
        __repr__() is the literal string 'null'.
        """
        self.assertEqual(repr(self.null), "null")
        self.assertEqual(str(self.null), "null")

    def testFalsely(self) -> None:
        """
        The sentinel is falsy (bool(null) is False).
        """
        self.assertFalse(bool(self.null))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False/0).
        """
        self.assertNotEqual(self.null, None)
        self.assertNotEqual(self.null, False)  # noqa: E712
        self.assertNotEqual(self.null, 0)

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        """
        copy() and deepcopy() preserve the identity of the singleton.
        """
        self.assertIs(copy.copy(self.null), self.null)
        self.assertIs(copy.deepcopy(self.null), self.null)
        self.assertIs(copy.deepcopy([self.null])[0], self.null)

    def testPickleRoundTrip(self) -> None:
        """
        Pickle round-trips preserve the identity of the singleton.
        """
        data: bytes = pickle.dumps(self.null)
        restored: nulltype = pickle.loads(data)
        self.assertIs(restored, self.null)

    def testThreadSafetySingleton(self) -> None:
        """
        Concurrent constructions return the same instance.
        """
        results: list[nulltype] = []
        lock: Lock = Lock()

        def worker():
            instance = self.nulltype()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for instance in results:
            self.assertIs(instance, self.null)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("nulltype", (self.nulltype,), {})

    def testNullify(self) -> None:
        """
        nullify() substitutes the sentinel only; None and other falsy values pass through.
        """
        self.assertIsNone(null.nullify(null))
        self.assertEqual(null.nullify(null, "fallback"), "fallback")
        self.assertIsNone(null.nullify(None, "fallback"))
        self.assertEqual(null.nullify(0, "fallback"), 0)
        self.assertEqual(null.nullify("", "fallback"), "")


if __name__ == '__main__':
    unittest.main()
