r"""
Herald type conversion registry.

Overview
- Kind: the closed set of option behaviors (bound int/uint/float/string/bool,
  bound custom type, callback). Every operation on an option dispatches on it.
- Converter: a conversion function `text -> value` paired with the type name
  shown in help (None when the type has no canonical name) and its Kind.
- Converters: a lookup table keyed by type identifier, filled with the
  built-ins on construction and extensible by the host program.

Built-in identifiers
- "int", "int8", "int16", "int32", "int64"       → help name "int"
- "uint", "uint8", "uint16", "uint32", "uint64"  → help name "unsigned"
- "float"                                        → help name "float"
- "str"                                          → help name "string"
- "bool"                                         → toggle, never converted
"int" and "uint" are 64 bits wide. Python classes int/float/str/bool map to
the identifiers of the same name through infer().

Numeric semantics (C library compatible)
- Integers: radix auto-detection like strtoll(text, NULL, 0): optional blanks,
  optional sign, 0x/0X hexadecimal, leading 0 octal, otherwise decimal. Only
  the longest valid prefix counts; text without digits reads as 0. The 64-bit
  intermediate saturates on overflow and unsigned parsing of "-n" wraps modulo
  2**64. Values that do not fit the destination width raise RangeError.
- Floats: longest valid prefix like strtod(); no number at all reads as 0.0.
- strict=True turns both looseness cases into ConversionError.

Quick example:
    >>> converters = Converters()
    >>> converters.lookup("uint8")("0xff")
    255
    >>> converters.lookup("int")("12abc")
    12
    >>> converters.register(complex, complex, name="complex")
"""
import enum
import functools
import re

from .faults import ConversionError, RangeError, UnsupportedTypeError
from .utils import Unset, coalesce

_BLANKS = r"[ \t\n\v\f\r]*"

_INTEGER = re.compile(_BLANKS + r"(?P<sign>[+-]?)(?:0[xX](?P<hex>[0-9a-fA-F]+)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*))")

_FLOAT = re.compile(_BLANKS + r"""(?P<number>[+-]?(?:
    (?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?)
    | (?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?
    | inf(?:inity)?
    | nan(?:\([0-9a-z_]*\))?
))""", re.IGNORECASE | re.VERBOSE)

_LIMIT = 1 << 64


class Kind(enum.Enum):
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    CUSTOM = "custom"
    CALLBACK = "callback"


def _scan_integer(text):
    """
    read the leading integer of `text` the way strtoll/strtoull do.

    returns (magnitude, negative, complete) where complete tells whether the
    whole text was consumed.
    """
    match = _INTEGER.match(text)
    if not match:
        return 0, False, False
    if match["hex"]:
        magnitude = int(match["hex"], 16)
    elif match["oct"]:
        magnitude = int(match["oct"], 8)
    else:
        magnitude = int(match["dec"])
    return magnitude, match["sign"] == "-", match.end() == len(text)


def parse_signed(text, /, bits=64, *, strict=False):
    """
    convert `text` to a signed integer of the given width.

    raises RangeError("value too large"/"value too small") when the value does
    not fit; in strict mode raises ConversionError for partial or empty numbers
    and RangeError when the 64-bit intermediate overflowed.
    """
    magnitude, negative, complete = _scan_integer(text)
    if strict and not complete:
        raise ConversionError("%r is not an integer" % text)

    value = -magnitude if negative else magnitude
    # strtoll clamps to the long long range before the destination check
    clamped = max(-(_LIMIT >> 1), min(value, (_LIMIT >> 1) - 1))
    if strict and clamped != value:
        raise RangeError("value too large" if value > 0 else "value too small")

    if clamped > (1 << (bits - 1)) - 1:
        raise RangeError("value too large")
    elif clamped < -(1 << (bits - 1)):
        raise RangeError("value too small")
    return clamped


def parse_unsigned(text, /, bits=64, *, strict=False):
    """
    convert `text` to an unsigned integer of the given width.

    a leading '-' negates modulo 2**64 (strtoull), so "-1" only fits a 64-bit
    destination.
    """
    magnitude, negative, complete = _scan_integer(text)
    if strict and not complete:
        raise ConversionError("%r is not an integer" % text)

    if magnitude >= _LIMIT:
        if strict:
            raise RangeError("value too large")
        value = _LIMIT - 1
    elif negative:
        value = (_LIMIT - magnitude) % _LIMIT
    else:
        value = magnitude

    if value > (1 << bits) - 1:
        raise RangeError("value too large")
    return value


def parse_float(text, /, *, strict=False):
    """
    convert the longest numeric prefix of `text` to a float (strtod).
    """
    match = _FLOAT.match(text)
    if strict and (not match or match.end() != len(text)):
        raise ConversionError("%r is not a number" % text)
    if not match:
        return 0.0
    number = match["number"]
    if match["hex"]:
        return float.fromhex(number)
    if "(" in number:
        number = number[:number.index("(")]
    return float(number)


def parse_string(text, /):
    return text


class Converter:
    """
    A conversion rule for one destination type.

    Attributes
    - function: callable(text) -> value; may raise ConversionError (or any
      ValueError) to reject the text.
    - name: type name shown in help, or None to fall back to the flag name.
    - kind: the Kind of option this converter produces.
    """
    __slots__ = ("function", "name", "kind")

    def __init__(self, function, /, name=Unset, kind=Kind.CUSTOM):
        if not callable(function):
            raise TypeError("converter function must be callable")
        if not isinstance(name, str | Unset | None):
            raise TypeError("converter 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError("converter 'name' cannot be empty")
        if not isinstance(kind, Kind):
            raise TypeError("converter 'kind' must be a Kind")
        self.function = function
        self.name = coalesce(name)
        self.kind = kind

    def __call__(self, text, /):
        return self.function(text)

    def __repr__(self):
        return "converter(name=%r, kind=%s)" % (self.name, self.kind.value)


class Converters:
    """
    Table of converters keyed by type identifier.

    Keys are strings for the built-ins or any hashable, typically a Python
    class for host-defined types. A fresh table is owned by every Registry,
    so extending one registry never affects another.
    """

    def __init__(self, *, strict=False):
        self._strict = bool(strict)
        self._table = {}

        for bits in (8, 16, 32, 64):
            self._table["int%d" % bits] = Converter(
                functools.partial(parse_signed, bits=bits, strict=self._strict), "int", Kind.INT
            )
            self._table["uint%d" % bits] = Converter(
                functools.partial(parse_unsigned, bits=bits, strict=self._strict), "unsigned", Kind.UINT
            )
        self._table["int"] = self._table["int64"]
        self._table["uint"] = self._table["uint64"]
        self._table["float"] = Converter(functools.partial(parse_float, strict=self._strict), "float", Kind.FLOAT)
        self._table["str"] = Converter(parse_string, "string", Kind.STRING)
        # booleans are toggled by the option itself; the function is never called
        self._table["bool"] = Converter(bool, None, Kind.BOOL)

    @property
    def strict(self):
        return self._strict

    def register(self, key, function, /, name=Unset):
        """
        register (or replace) the converter for `key`.

        `function` may be a plain callable or a ready-made Converter; plain
        callables produce CUSTOM options named `name` in help.
        """
        if isinstance(key, str) and not key.strip():
            raise ValueError("converter key cannot be empty")
        if isinstance(function, Converter):
            self._table[key] = function
        else:
            self._table[key] = Converter(function, name, Kind.CUSTOM)
        return self._table[key]

    def lookup(self, key, /):
        try:
            return self._table[key]
        except (KeyError, TypeError):
            raise UnsupportedTypeError("unsupported destination type %r" % (key,)) from None

    @staticmethod
    def infer(value, /):
        """
        default type identifier for a Python value (bool before int).
        """
        match value:
            case bool():
                return "bool"
            case int():
                return "int"
            case float():
                return "float"
            case str():
                return "str"
            case _:
                return type(value)

    def __contains__(self, key):
        try:
            return key in self._table
        except TypeError:
            return False

    def __iter__(self):
        return iter(self._table)

    def __len__(self):
        return len(self._table)


__all__ = (
    "Kind",
    "Converter",
    "Converters",
    "parse_signed",
    "parse_unsigned",
    "parse_float",
    "parse_string",
)
