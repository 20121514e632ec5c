"""
Herald registry: the declared options of one program and how to parse them.

What it owns
- options, in registration order (help listing order); names are unique
  across options and aliases.
- the alias table (alias → canonical name).
- its own converter table (built-ins plus host-registered types).
- the help renderer, the one-shot error description and the parser toggles.

Registration happens before parsing. A registry is plain state: nothing is
shared between two registries, and one registry is meant for one parse.

Quick start
    import sys
    from herald import Registry, Ref

    registry = Registry(grouping=True)
    verbose = Ref(False)
    count = Ref(5, type="uint8")
    registry.add(verbose, "v", "talk more")
    registry.add(count, "n", "# of iterations")
    registry.alias("count", "n")
    registry.help()

    files = registry.parse(sys.argv)   # e.g. prog -v -n 3 a.txt -- -b.txt

Toggles (keyword-only, all optional)
- shell: print diagnostics and exit (True, default) or raise them (False).
- colorful: style help and diagnostics with rich (default False).
- grouping: accept "-abc" as "-a -b -c" (default False).
- types: show type names in the default help (default True).
- strict: reject partially numeric text instead of reading its prefix (default False).
- basename: show only the basename of argv[0] as the program name (default False).
"""
import sys

from . import helper
from .converters import Converter, Converters
from .faults import DuplicateNameError, EmptyNameError
from .options import Option, Ref
from .parser import parse
from .utils import Unset, UnsetType, coalesce, mirror, rename


class Registry:

    shell = mirror("shell")
    colorful = mirror("colorful")
    grouping = mirror("grouping")
    types = mirror("types")
    strict = mirror("strict")
    basename = mirror("basename")

    def __init__(
            self,
            *,
            shell=Unset,
            colorful=Unset,
            grouping=Unset,
            types=Unset,
            strict=Unset,
            basename=Unset
    ):
        self._shell = bool(coalesce(shell, True))
        self._colorful = bool(coalesce(colorful, False))
        self._grouping = bool(coalesce(grouping, False))
        self._types = bool(coalesce(types, True))
        self._strict = bool(coalesce(strict, False))
        self._basename = bool(coalesce(basename, False))

        self._options = {}
        self._aliases = {}
        self._converters = Converters(strict=self._strict)
        self._renderer = Unset
        self._description = Unset

    @property
    def converters(self):
        return self._converters

    @property
    def renderer(self):
        return coalesce(self._renderer)

    def _claim(self, name):
        if not isinstance(name, str):
            raise TypeError("option names must be strings")
        elif not name:
            raise EmptyNameError("option name cannot be empty")
        elif name in self._options or name in self._aliases:
            raise DuplicateNameError("name %r is already registered" % name)

    def add(self, target, name, descr="", /, convert=Unset):
        """
        register an option and return it.

        parameters
        - target: Ref → bound option converting into ref.value;
                  callable → callback option receiving the raw text.
        - name: flag name without dashes; unique and non-empty.
        - descr: help text (may be empty).
        - convert: Ref options only. A registered type identifier, a Converter,
          or a plain callable replacing the conversion picked from ref.type.

        raises
        - EmptyNameError / DuplicateNameError for bad names.
        - UnsupportedTypeError when no converter exists for the ref's type.
        - TypeError for anything that is neither a Ref nor a callable.
        """
        self._claim(name)

        if isinstance(target, Ref):
            match convert:
                case UnsetType():
                    converter = self._converters.lookup(target.type)
                case Converter():
                    converter = convert
                case _ if convert in self._converters:
                    converter = self._converters.lookup(convert)
                case _ if callable(convert):
                    converter = Converter(convert)
                case _:
                    converter = self._converters.lookup(convert)
            option = Option(name, target, converter=converter, descr=descr)
        elif callable(target):
            if convert is not Unset:
                raise TypeError("callback options do not take a converter")
            option = Option(name, target, descr=descr)
        else:
            raise TypeError("add() target must be a ref or a callable")

        self._options[name] = option
        return option

    def converter(self, key, function, /, name=Unset):
        """
        register a conversion for an extra destination type.

        `key` is what Ref(..., type=key) names (usually the value's class);
        `name` is the type label shown in help.
        """
        return self._converters.register(key, function, name)

    def alias(self, alias, name, /):
        """
        make `alias` resolve to the option registered as `name`.

        the canonical name is looked up at parse time, so it may be registered
        after its alias.
        """
        if not isinstance(name, str):
            raise TypeError("alias target must be a string")
        elif not name:
            raise EmptyNameError("alias target cannot be empty")
        self._claim(alias)
        self._aliases[alias] = name

    def alias_of(self, name, /):
        """
        first alias registered for the canonical `name`, or None.
        """
        for alias, canonical in self._aliases.items():
            if canonical == name:
                return alias
        return None

    def resolve(self, name, /):
        """
        option for `name`: exact option name first, then alias.
        """
        try:
            return self._options[name]
        except KeyError:
            pass
        try:
            return self._options[self._aliases[name]]
        except KeyError:
            return None

    def show_types(self, enabled=True, /):
        self._types = bool(enabled)

    def allow_grouping(self, enabled=True, /):
        self._grouping = bool(enabled)

    def help(self, renderer=Unset, /):
        """
        install a help renderer called as renderer(program) on "-help".

        without argument the default listing of helper.render is installed.
        """
        if renderer is Unset:
            @rename("usage")
            def renderer(program, /):
                helper.render(self, program)
        elif not callable(renderer):
            raise TypeError("help() argument must be callable")
        self._renderer = renderer

    def describe(self, description, /):
        """
        set the text shown under the next diagnostic (and only that one).
        """
        if not isinstance(description, str):
            raise TypeError("describe() argument must be a string")
        self._description = description

    def pop_description(self):
        description, self._description = self._description, Unset
        return coalesce(description) or None

    def parse(self, argv=Unset, /, collect=Unset):
        """
        parse argv (sys.argv by default) and return the positional arguments.

        with `collect`, every positional argument is passed to it and None is
        returned. Fatal errors print one diagnostic and exit with status 1
        (or raise the ParseFault when the registry is not in shell mode);
        "-help" renders help and exits with status 0.
        """
        return parse(self, coalesce(argv, sys.argv), collect)

    def __iter__(self):
        return iter(self._options.values())

    def __len__(self):
        return len(self._options)

    def __contains__(self, name):
        return self.resolve(name) is not None

    def __getitem__(self, name):
        if (option := self.resolve(name)) is None:
            raise KeyError(name)
        return option

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self._options))

    def __rich_repr__(self):
        yield "options", tuple(self._options.values())
        yield "aliases", dict(self._aliases)


__all__ = (
    "Registry",
)
