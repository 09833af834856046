"""
Tests for the pending singleton (read of an unsettled awaitable).
"""
import copy
import unittest
from unittest import TestCase

from rich.console import Console

from cyan.equality import deep_equal
from cyan.pending import pending


class PendingTest(TestCase):

    def testSingleton(self) -> None:
        """
        The type hands back the one pending instance.
        """
        self.assertIs(type(pending)(), pending)

    def testFalsely(self) -> None:
        """
        The sentinel is falsy.
        """
        self.assertFalse(pending)

    def testRepr(self) -> None:
        """
        __repr__() is '(pending)'.
        """
        self.assertEqual(repr(pending), "(pending)")

    def testRichConsolePrint(self) -> None:
        """
        Console.print(...) renders '(pending)' without ANSI when color is disabled.
        """
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(pending)
        self.assertEqual(capture.get().strip(), "(pending)")

    def testCopyPreserveSingleton(self) -> None:
        """
        copy() and deepcopy() preserve the identity of the singleton.
        """
        self.assertIs(copy.copy(pending), pending)
        self.assertIs(copy.deepcopy(pending), pending)

    def testDeepEqualOnlyToItself(self) -> None:
        """
        An unsettled read never matches a concrete value, None included.
        """
        self.assertTrue(deep_equal(pending, pending))
        self.assertFalse(deep_equal(pending, None))
        self.assertFalse(deep_equal(pending, 1))
        self.assertFalse(deep_equal([pending], [None]))


if __name__ == '__main__':
    unittest.main()
