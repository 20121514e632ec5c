"""
Herald parser engine: a single forward pass over argv with one-token lookahead.

Per token
1. no leading '-'              → positional, handed to the sink.
2. strip '--' (or '-')         → bare token; an empty bare token ("-" or "--")
                                 ends flag scanning: every later token is positional.
3. bare == "help"              → with a help renderer installed: render, exit 0.
4. split on the first '='      → flag name + inline value ('' when "-n=").
5. resolve name                → option, then alias → option; else INVALID_OPTION.
6. value-taking, no inline     → consume the next token, or MISSING_VALUE.
7. value-taking                → parse_arg(); errors/rejections are INVALID_VALUE.
8. value-less                  → inline value is UNEXPECTED_VALUE; else parse_arg().
9. failure + grouping allowed  → retry the bare name as a group of short flags.
10. still failing              → one diagnostic, then exit 1 (or raise outside shell mode).

Grouping
- "abc" is a valid group when it has at least two codepoints, "a" and "b"
  resolve to options without a value and "c" resolves to any option. "a" and
  "b" run first, in order, without inspecting their outcome; "c" then receives
  the inline value or the next token and decides the outcome of the group.
- A failed attempt never consumes input: the group restarts from the cursor
  position of its own token.
"""
import os.path
import sys

from .faults import Outcome, Rejected, complain, trigger
from .similarity import suggest
from .utils import Unset


class Parser:
    """
    One parse run over `argv` against a registry.

    The registry is only read (plus the one-shot description it hands over on
    failure); all scanning state lives here.
    """

    def __init__(self, registry, argv, /):
        self._registry = registry
        self._argv = tuple(argv)
        program = self._argv[0] if self._argv else ""
        self._program = os.path.basename(program) if registry.basename else program

    @property
    def program(self):
        return self._program

    def _process(self, name, value, index):
        """
        resolve and apply one flag.

        returns (outcome, value, index, error): the value actually used, the
        cursor of the last consumed token and the conversion error, if any.
        """
        option = self._registry.resolve(name)
        if option is None:
            return Outcome.INVALID_OPTION, value, index, None

        if option.takes_value():
            if value is None:
                if index + 1 >= len(self._argv):
                    return Outcome.MISSING_VALUE, value, index, None
                index += 1
                value = self._argv[index]
        elif value is not None:
            return Outcome.UNEXPECTED_VALUE, value, index, None

        try:
            accepted = option.parse_arg(value)
        except Exception as exception:
            return Outcome.INVALID_VALUE, value, index, exception
        return (Outcome.OK if accepted else Outcome.INVALID_VALUE), value, index, None

    def _is_group(self, name):
        if not self._registry.grouping or len(name) < 2:
            return False
        *head, last = name
        for char in head:
            if (option := self._registry.resolve(char)) is None or option.takes_value():
                return False
        return self._registry.resolve(last) is not None

    def _group(self, name, value, index):
        *head, last = name
        for char in head:
            self._process(char, None, index)
        return self._process(last, value, index)

    def _fail(self, outcome, /, flag, dashes, value, exception):
        # never returns: trigger() exits in shell mode and raises otherwise
        description = self._registry.pop_description()
        if description is None and isinstance(exception, Rejected):
            description = exception.description
        if description is None and exception is not None and str(exception):
            description = str(exception)

        suggestion = None
        if outcome is Outcome.INVALID_OPTION:
            suggestion = suggest(flag, [option.name for option in self._registry])

        trigger(
            complain(
                outcome,
                flag=flag,
                dashes=dashes,
                value=value,
                suggestion=suggestion,
                description=description,
                exception=exception,
                program=self._program,
                helper=self._registry.renderer is not None,
            ),
            shell=self._registry.shell,
            colorful=self._registry.colorful,
        )

    def run(self, sink, /):
        """
        scan the whole vector, feeding positional arguments to `sink` in order.
        """
        index = 1
        while index < len(self._argv):
            token = self._argv[index]
            if not token.startswith("-"):
                sink(token)
                index += 1
                continue

            dashes = "--" if token.startswith("--") else "-"
            bare = token[len(dashes):]
            if not bare:
                index += 1
                break

            if bare == "help" and (renderer := self._registry.renderer) is not None:
                renderer(self._program)
                sys.exit(0)

            name, separator, inline = bare.partition("=")
            inline = inline if separator else None

            flag = name
            outcome, value, cursor, exception = self._process(name, inline, index)
            if outcome is not Outcome.OK and self._is_group(name):
                flag = name[-1]
                outcome, value, cursor, exception = self._group(name, inline, index)

            if outcome is not Outcome.OK:
                self._fail(outcome, flag=flag, dashes=dashes, value=value, exception=exception)
            index = cursor + 1

        while index < len(self._argv):
            sink(self._argv[index])
            index += 1


def parse(registry, argv, /, collect=Unset):
    """
    parse `argv` (program name first) against `registry`.

    returns the positional arguments as a list, or None when `collect` is
    given, in which case each positional argument is passed to it instead.
    """
    parser = Parser(registry, argv)
    if collect is not Unset:
        if not callable(collect):
            raise TypeError("parse() 'collect' must be callable")
        parser.run(collect)
        return None
    arguments = []
    parser.run(arguments.append)
    return arguments


__all__ = (
    "Parser",
    "parse",
)
