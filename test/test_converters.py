"""
Converters module behavioral tests (numeric semantics, table lookups, extension).

Scope
- Validate C-compatible integer reading: radix detection, prefixes, partial text.
- Validate destination range checks for signed and unsigned widths.
- Validate permissive float reading and the strict opt-in.
- Validate the converter table: built-in names, inference, host registration.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import unittest
from unittest import TestCase

from herald import (
    Converter,
    Converters,
    ConversionError,
    Kind,
    RangeError,
    UnsupportedTypeError,
    parse_float,
    parse_signed,
    parse_unsigned,
)


class TestIntegers(TestCase):
    """Integer reading follows strtoll/strtoull with radix auto-detection."""

    def testDecimal(self):
        self.assertEqual(parse_signed("42"), 42)
        self.assertEqual(parse_signed("-12"), -12)
        self.assertEqual(parse_signed("+5"), 5)

    def testRadixPrefixes(self):
        self.assertEqual(parse_signed("0x1f"), 31)
        self.assertEqual(parse_signed("0X1F"), 31)
        self.assertEqual(parse_signed("017"), 15)
        self.assertEqual(parse_signed("0"), 0)

    def testLeadingBlanksSkipped(self):
        self.assertEqual(parse_signed("  \t7"), 7)

    def testPartialTextKeepsPrefix(self):
        self.assertEqual(parse_signed("12abc"), 12)
        self.assertEqual(parse_signed("08"), 0)
        self.assertEqual(parse_signed("0x"), 0)

    def testNoDigitsReadsZero(self):
        self.assertEqual(parse_signed("abc"), 0)
        self.assertEqual(parse_signed(""), 0)
        self.assertEqual(parse_unsigned("-"), 0)

    def testSignedRange(self):
        self.assertEqual(parse_signed("127", bits=8), 127)
        self.assertEqual(parse_signed("-128", bits=8), -128)
        with self.assertRaises(RangeError) as context:
            parse_signed("128", bits=8)
        self.assertEqual(str(context.exception), "value too large")
        with self.assertRaises(RangeError) as context:
            parse_signed("-129", bits=8)
        self.assertEqual(str(context.exception), "value too small")

    def testSignedOverflowSaturates(self):
        self.assertEqual(parse_signed("99999999999999999999"), (1 << 63) - 1)
        self.assertEqual(parse_signed("-99999999999999999999"), -(1 << 63))
        with self.assertRaises(RangeError):
            parse_signed("99999999999999999999", bits=32)

    def testUnsignedRange(self):
        self.assertEqual(parse_unsigned("255", bits=8), 255)
        self.assertEqual(parse_unsigned("0xff", bits=8), 255)
        with self.assertRaises(RangeError):
            parse_unsigned("256", bits=8)

    def testUnsignedNegativeWraps(self):
        self.assertEqual(parse_unsigned("-1"), (1 << 64) - 1)
        with self.assertRaises(RangeError):
            parse_unsigned("-1", bits=8)

    def testStrictRejectsPartialText(self):
        with self.assertRaises(ConversionError):
            parse_signed("12abc", strict=True)
        with self.assertRaises(ConversionError):
            parse_unsigned("", strict=True)
        self.assertEqual(parse_signed("0x10", strict=True), 16)

    def testStrictRejectsSaturation(self):
        with self.assertRaises(RangeError):
            parse_signed("99999999999999999999", strict=True)


class TestFloats(TestCase):
    """Float reading follows strtod: longest numeric prefix, else 0.0."""

    def testPlainNumbers(self):
        self.assertEqual(parse_float("1.5"), 1.5)
        self.assertEqual(parse_float(".5"), 0.5)
        self.assertEqual(parse_float("-3"), -3.0)

    def testExponentAndTrailingText(self):
        self.assertEqual(parse_float("2.5e3x"), 2500.0)
        self.assertEqual(parse_float("7e"), 7.0)

    def testHexadecimal(self):
        self.assertEqual(parse_float("0x1p3"), 8.0)

    def testSpecialValues(self):
        self.assertEqual(parse_float("-inf"), -math.inf)
        self.assertEqual(parse_float("Infinity"), math.inf)
        self.assertTrue(math.isnan(parse_float("nan")))

    def testGarbageReadsZero(self):
        self.assertEqual(parse_float("abc"), 0.0)

    def testStrictRejectsGarbage(self):
        with self.assertRaises(ConversionError):
            parse_float("1.5x", strict=True)
        with self.assertRaises(ConversionError):
            parse_float("abc", strict=True)


class TestConverters(TestCase):
    """Behavioral tests for the converter table."""

    def setUp(self):
        self.converters = Converters()

    def testBuiltinNames(self):
        self.assertEqual(self.converters.lookup("int").name, "int")
        self.assertEqual(self.converters.lookup("int16").name, "int")
        self.assertEqual(self.converters.lookup("uint8").name, "unsigned")
        self.assertEqual(self.converters.lookup("float").name, "float")
        self.assertEqual(self.converters.lookup("str").name, "string")
        self.assertIsNone(self.converters.lookup("bool").name)

    def testBuiltinKinds(self):
        self.assertIs(self.converters.lookup("int32").kind, Kind.INT)
        self.assertIs(self.converters.lookup("uint").kind, Kind.UINT)
        self.assertIs(self.converters.lookup("bool").kind, Kind.BOOL)

    def testWidthsApply(self):
        with self.assertRaises(RangeError):
            self.converters.lookup("int8")("200")
        self.assertEqual(self.converters.lookup("int")("200"), 200)

    def testUnknownKeyRejected(self):
        with self.assertRaises(UnsupportedTypeError):
            self.converters.lookup("nope")
        with self.assertRaises(UnsupportedTypeError):
            self.converters.lookup([])

    def testInfer(self):
        self.assertEqual(Converters.infer(True), "bool")
        self.assertEqual(Converters.infer(3), "int")
        self.assertEqual(Converters.infer(1.0), "float")
        self.assertEqual(Converters.infer("x"), "str")
        self.assertIs(Converters.infer(1j), complex)

    def testRegisterHostType(self):
        converter = self.converters.register(complex, complex, name="complex")
        self.assertIs(self.converters.lookup(complex), converter)
        self.assertIs(converter.kind, Kind.CUSTOM)
        self.assertEqual(converter("1+2j"), 1 + 2j)
        self.assertIn(complex, self.converters)

    def testRegisterWithoutName(self):
        self.assertIsNone(self.converters.register("upper", str.upper).name)

    def testStrictTable(self):
        strict = Converters(strict=True)
        self.assertTrue(strict.strict)
        with self.assertRaises(ConversionError):
            strict.lookup("int")("12abc")
        self.assertEqual(self.converters.lookup("int")("12abc"), 12)

    def testConverterValidation(self):
        with self.assertRaises(TypeError):
            Converter("not callable")
        with self.assertRaises(ValueError):
            Converter(str, "  ")


if __name__ == "__main__":
    unittest.main()
