"""
Default help renderer.

Output (stdout), one entry per option in registration order:

    Usage: prog ...
        -name[, -alias][ TYPE]
            help text

TYPE is the converter's type name, or the flag name uppercased (ASCII letters
only) when the option has none. It is shown only for options taking a value
and only while the registry shows types. When the registry is colorful the
type label is dimmed; a `__styles__` mapping in __main__ may restyle it under
the "type-name", "usage" and "option-name" keys.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

console = Console()


def _upper(name):
    return "".join(char.upper() if char.isascii() else char for char in name)


def render(registry, program, /):
    styles = defaultdict(str, {
        "usage": "",
        "option-name": "bold",
        "type-name": "dim",
        "help-text": "",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if registry.colorful else ""

    lines = [Text.assemble(("Usage: %s ..." % program, styler("usage")))]
    for option in registry:
        line = Text("    ")
        line.append("-" + option.name, styler("option-name"))
        if (alias := registry.alias_of(option.name)) is not None:
            line.append(", ").append("-" + alias, styler("option-name"))
        if option.takes_value() and registry.types:
            line.append(" ").append(option.value_name() or _upper(option.name), styler("type-name"))
        lines.append(line)
        if option.descr:
            lines.append(Text.assemble("        ", (str(option.descr), styler("help-text"))))

    console.print(Text("\n").join(lines), soft_wrap=True, highlight=False)


__all__ = (
    "render",
)
