"""
Herald faults (errors) and diagnostics rendering.

Scope
- Outcome: the per-token result of resolving one flag (OK or one failure kind).
- Registration errors: programmer mistakes caught synchronously by Registry.add()
  and Registry.alias() (empty names, duplicates, unsupported destination types).
- Conversion errors: raised by converters and callbacks, caught by the parser
  and turned into an INVALID_VALUE outcome; never seen by the host program.
- Parse faults: one exception type per failure outcome. They carry a message
  plus runtime options and know how to render themselves with rich.
- complain(): build the fault for an outcome (the diagnostics reporter).
- trigger(): central entry point to surface a fault.

Message shape (one diagnostic per run, GNU getopt wording)
    prog: unrecognized option ‘--fooo’; did you mean ‘--foo’?
    <optional one-shot description>
    Try 'prog -help' for more information.

Integration
- In shell mode the fault is printed on stderr and the process exits with 1.
- Outside shell mode the fault is raised so embedding code can catch it.
- A `__styles__` mapping in __main__ overrides the palette used when the
  registry is colorful; `__prog__` in __main__ overrides the program name.
"""
import copy
import sys
from collections import defaultdict
from enum import Enum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class Outcome(Enum):
    """
    result of resolving a single flag token.

    anything but OK is fatal for the whole parse unless short-flag grouping
    recovers it.
    """
    OK = "ok"
    INVALID_OPTION = "invalid-option"
    MISSING_VALUE = "missing-value"
    UNEXPECTED_VALUE = "unexpected-value"
    INVALID_VALUE = "invalid-value"


class RegistrationError(Exception):
    """Base class for errors in the way options are declared."""


class EmptyNameError(RegistrationError, ValueError): ...
class DuplicateNameError(RegistrationError, ValueError): ...
class UnsupportedTypeError(RegistrationError, TypeError): ...


class ConversionError(ValueError):
    """
    Raised by a converter when the text does not fit the destination type.

    The message, when present, is shown below the diagnostic line unless the
    host already set a description for this failure.
    """


class RangeError(ConversionError):
    """Raised when a parsed number does not fit the destination's range."""


class Rejected(ConversionError):
    """
    Raised by callback options to reject their argument with an explanation.

    It replaces the one-shot registry description for callbacks that want to
    report their own detail: the description travels with the exception.
    """

    def __init__(self, description=Unset, /):
        super().__init__(coalesce(description, ""))
        self.description = coalesce(description)


class ParseFault(Exception):
    outcome = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def program(self):
        return getattr(__import__("__main__"), "__prog__", self.options.get("program", ""))

    def lines(self):
        """
        plain diagnostic lines: the message line, then description and hint when set.
        """
        lines = ["%s: %s" % (self.program, self.message)]
        if description := self.options.get("description"):
            lines.append(str(description))
        if self.options.get("helper"):
            lines.append("Try '%s -help' for more information." % self.program)
        return lines

    def __rich__(self):
        styles = defaultdict(str, {
            "prog-name": "bold",
            "error-message": "red",
            "description": "",
            "hint": "italic dim",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.options.get("colorful") else ""

        text = Text.assemble((self.program, styler("prog-name")), ": ", (self.message, styler("error-message")))
        if description := self.options.get("description"):
            text.append("\n").append(str(description), styler("description"))
        if self.options.get("helper"):
            text.append("\n").append("Try '%s -help' for more information." % self.program, styler("hint"))
        return text

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        console.print(self, soft_wrap=True, highlight=False)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidOptionError(ParseFault):
    outcome = Outcome.INVALID_OPTION


class MissingValueError(ParseFault):
    outcome = Outcome.MISSING_VALUE


class UnexpectedValueError(ParseFault):
    outcome = Outcome.UNEXPECTED_VALUE


class InvalidValueError(ParseFault):
    outcome = Outcome.INVALID_VALUE


def complain(outcome, /, **options):
    """
    build the fault describing a failed outcome.

    recognized options
    - flag: bare flag name as typed (without dashes and without '=value').
    - dashes: "-" or "--", whichever the user typed.
    - value: offending text for INVALID_VALUE.
    - suggestion: closest registered name for INVALID_OPTION, or None.
    - program, description, helper, shell, colorful: forwarded for rendering.
    """
    flag = "%s%s" % (options.get("dashes", "-"), options.get("flag", ""))
    match outcome:
        case Outcome.INVALID_OPTION:
            message = "unrecognized option ‘%s’" % flag
            if suggestion := options.get("suggestion"):
                message += "; did you mean ‘%s%s’?" % (options.get("dashes", "-"), suggestion)
            return InvalidOptionError(message, **options)
        case Outcome.MISSING_VALUE:
            return MissingValueError("option ‘%s’ requires an argument" % flag, **options)
        case Outcome.UNEXPECTED_VALUE:
            return UnexpectedValueError("option ‘%s’ doesn't allow an argument" % flag, **options)
        case Outcome.INVALID_VALUE:
            return InvalidValueError(
                "invalid argument ‘%s’ for ‘%s’" % (options.get("value", ""), flag), **options
            )
        case _:
            raise ValueError("complain() argument must be a failed outcome")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseFault).
    - options are merged into the fault via __replace__ before triggering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "Outcome",
    "RegistrationError",
    "EmptyNameError",
    "DuplicateNameError",
    "UnsupportedTypeError",
    "ConversionError",
    "RangeError",
    "Rejected",
    "ParseFault",
    "InvalidOptionError",
    "MissingValueError",
    "UnexpectedValueError",
    "InvalidValueError",
    "complain",
    "trigger",
)
