"""
Faults module tests (diagnostic wording, rendering, trigger contract).

Scope
- Validate complain() messages per outcome.
- Validate plain and rich renderings agree.
- Validate trigger(): raise outside shell mode, print and exit 1 inside it.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from contextlib import redirect_stderr
from unittest import TestCase

from herald import (
    InvalidOptionError,
    InvalidValueError,
    MissingValueError,
    Outcome,
    ParseFault,
    Rejected,
    UnexpectedValueError,
    complain,
    trigger,
)


class TestComplain(TestCase):

    def testInvalidOption(self):
        fault = complain(Outcome.INVALID_OPTION, flag="fooo", dashes="--", suggestion="foo")
        self.assertIsInstance(fault, InvalidOptionError)
        self.assertEqual(fault.message, "unrecognized option ‘--fooo’; did you mean ‘--foo’?")

    def testMissingValue(self):
        fault = complain(Outcome.MISSING_VALUE, flag="n", dashes="-")
        self.assertIsInstance(fault, MissingValueError)
        self.assertEqual(fault.message, "option ‘-n’ requires an argument")

    def testUnexpectedValue(self):
        fault = complain(Outcome.UNEXPECTED_VALUE, flag="l", dashes="--")
        self.assertIsInstance(fault, UnexpectedValueError)
        self.assertEqual(fault.message, "option ‘--l’ doesn't allow an argument")

    def testInvalidValue(self):
        fault = complain(Outcome.INVALID_VALUE, flag="n", dashes="-", value="abc")
        self.assertIsInstance(fault, InvalidValueError)
        self.assertIs(fault.outcome, Outcome.INVALID_VALUE)
        self.assertEqual(fault.message, "invalid argument ‘abc’ for ‘-n’")

    def testOkIsNotAFailure(self):
        with self.assertRaises(ValueError):
            complain(Outcome.OK)


class TestRendering(TestCase):

    def setUp(self):
        self.fault = complain(
            Outcome.MISSING_VALUE,
            flag="n",
            dashes="-",
            program="prog",
            description="a number is needed",
            helper=True,
        )

    def testLines(self):
        self.assertEqual(self.fault.lines(), [
            "prog: option ‘-n’ requires an argument",
            "a number is needed",
            "Try 'prog -help' for more information.",
        ])

    def testLinesWithoutExtras(self):
        fault = complain(Outcome.MISSING_VALUE, flag="n", program="prog")
        self.assertEqual(fault.lines(), ["prog: option ‘-n’ requires an argument"])

    def testRichMatchesLines(self):
        for colorful in (False, True):
            fault = copy.replace(self.fault, colorful=colorful)
            self.assertEqual(fault.__rich__().plain, "\n".join(self.fault.lines()))

    def testColorfulAppliesStyles(self):
        plain = copy.replace(self.fault, colorful=False).__rich__()
        styled = copy.replace(self.fault, colorful=True).__rich__()
        self.assertFalse([span for span in plain.spans if span.style])
        self.assertTrue([span for span in styled.spans if span.style])


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        fault = complain(Outcome.INVALID_OPTION, flag="x", program="prog")
        with self.assertRaises(InvalidOptionError) as context:
            trigger(fault, shell=False)
        self.assertIsNot(context.exception, fault)
        self.assertEqual(context.exception.options["program"], "prog")

    def testExitsInShell(self):
        fault = complain(Outcome.INVALID_OPTION, flag="x", program="prog")
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            trigger(fault, shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertEqual(stderr.getvalue(), "prog: unrecognized option ‘-x’\n")

    def testReplaceKeepsType(self):
        fault = complain(Outcome.INVALID_VALUE, flag="n", value="1")
        replaced = copy.replace(fault, description="detail")
        self.assertIsInstance(replaced, InvalidValueError)
        self.assertEqual(replaced.message, fault.message)
        self.assertEqual(replaced.options["description"], "detail")
        self.assertNotIn("description", fault.options)

    def testContract(self):
        with self.assertRaises(TypeError):
            trigger(object())

    def testFaultBase(self):
        self.assertTrue(issubclass(MissingValueError, ParseFault))


class TestRejected(TestCase):

    def testDescription(self):
        self.assertEqual(Rejected("detail").description, "detail")
        self.assertEqual(str(Rejected("detail")), "detail")
        self.assertIsNone(Rejected().description)
        self.assertIsInstance(Rejected(), ValueError)


if __name__ == "__main__":
    unittest.main()
