"""
Herald option model.

Overview
- Ref[_T]: caller-owned storage cell an option writes into (`ref.value`).
- Option: one registered flag. It is a closed variant over Kind, and each
  operation (takes_value, parse_arg, value_name) is a single `match` on it.

Behavior per kind
- INT/UINT/FLOAT/STRING/CUSTOM (bound scalars): convert the text and store it
  in the target; conversion errors propagate to the parser. Always take a value.
- BOOL: ignores any text and stores the negation of the target's value as it
  was when the option was registered. Never takes a value, so repeating the
  flag keeps the same result instead of toggling back and forth.
- CALLBACK: hands the raw text to the callable. `False` rejects the text,
  `True` or `None` accept it, and raising Rejected(description) rejects it with
  an explanation. Always takes a value.

Quick example:
    >>> count = Ref(5)
    >>> option = Option("n", count, converter=Converters().lookup("int"), descr="# of iterations")
    >>> option.parse_arg("0x10"), count.value
    (True, 16)
"""
from rich.text import Text

from .converters import Converter, Converters, Kind
from .faults import EmptyNameError
from .utils import Unset, coalesce, mirror


class Ref[_T]:
    """
    Mutable storage cell bound to an option.

    Parameters
    - value: initial value; for bool refs it also decides what the flag sets
      (the negation of the value at registration time).
    - type: type identifier understood by Converters ("uint8", "float", a
      class, ...). Defaults to the identifier inferred from `value`.
    """
    __slots__ = ("value", "type")

    def __init__(self, value=Unset, /, type=Unset):
        if value is Unset and type is Unset:
            raise TypeError("ref needs an initial value or an explicit 'type'")
        self.value = coalesce(value)
        self.type = coalesce(type, Converters.infer(value))

    def __repr__(self):
        return "ref(%r, type=%r)" % (self.value, self.type)

    def __rich_repr__(self):
        yield self.value
        yield "type", self.type


class Option:
    """
    A registered flag and its behavior.

    The structure (name, kind, converter, target) is fixed at construction;
    only the target storage changes while parsing.
    """

    name = mirror("name")
    descr = mirror("descr")
    kind = mirror("kind")
    converter = mirror("converter")
    target = mirror("target")

    def __init__(self, name, target, /, converter=Unset, descr=""):
        if not isinstance(name, str):
            raise TypeError("option name must be a string")
        elif not name:
            raise EmptyNameError("option name cannot be empty")
        if not isinstance(descr, str | Text):
            raise TypeError("option 'descr' must be a string")

        self._name = name
        self._descr = descr
        self._target = target

        if isinstance(target, Ref):
            if not isinstance(converter, Converter):
                raise TypeError("bound options need a converter")
            self._converter = converter
            self._kind = converter.kind
            # captured once: every match sets the same value
            self._toggled = not target.value if self._kind is Kind.BOOL else Unset
        elif callable(target):
            self._converter = None
            self._kind = Kind.CALLBACK
            self._toggled = Unset
        else:
            raise TypeError("option target must be a ref or a callable")

    def takes_value(self):
        match self._kind:
            case Kind.BOOL:
                return False
            case _:
                return True

    def value_name(self):
        """
        type name for help text, or None when the option has no canonical one.
        """
        match self._kind:
            case Kind.BOOL | Kind.CALLBACK:
                return None
            case _:
                return self._converter.name

    def parse_arg(self, text=None, /):
        """
        apply `text` to the option and report whether it was accepted.

        conversion errors (ConversionError, RangeError, Rejected or any
        ValueError raised by a custom converter) propagate to the caller.
        """
        match self._kind:
            case Kind.BOOL:
                self._target.value = self._toggled
                return True
            case Kind.CALLBACK:
                accepted = self._target(text)
                return accepted is None or bool(accepted)
            case _:
                self._target.value = self._converter(text)
                return True

    def __eq__(self, other):
        # lookup by exact name; options themselves compare by identity
        if isinstance(other, str):
            return self._name == other
        return self is other

    def __hash__(self):
        return id(self)

    def __repr__(self):
        return "option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "kind", self.kind.value
        yield "takes_value", self.takes_value()


__all__ = (
    "Ref",
    "Option",
)
