from dataclasses import dataclass

from rich.pretty import pprint

from herald import *


@dataclass
class Pair:
    key: str
    value: str


def pair(text):
    key, separator, value = text.partition(":")
    if not separator or ":" in value or not key or not value:
        raise ConversionError("pair must be of format 'key:value'")
    return Pair(key, value)


registry = Registry(basename=True)
registry.converter(Pair, pair, name="key:value")

listing = Ref(False)
count = Ref(5)
bar = Ref("baz")
scale = Ref(1.0)
x = Ref(Pair("<none>", "<none>"))
quiet = Ref(False)

registry.add(listing, "l", "Long listing")
registry.add(count, "n", "# of iterations")
registry.add(bar, "bar", "a string")
registry.add(scale, "scale", "scale for something")
registry.add(lambda text: print("foo:", text), "foo", "Print value")


def color(text):
    if text in ("always", "yes", "force", "never", "no", "none", "auto", "tty", "if-tty"):
        return True
    registry.describe(
        "Valid arguments are:\n"
        "  - ‘always’, ‘yes’, ‘force’\n"
        "  - ‘never’, ‘no’, ‘none’\n"
        "  - ‘auto’, ‘tty’, ‘if-tty’"
    )
    return False


registry.add(color, "color", "colorize the output")
registry.add(lambda text: True, "플래그", "Flag with unicode name")
registry.add(x, "x", "x")
registry.add(quiet, "no-help")
registry.alias("c", "color")
registry.help()
registry.show_types(False)


if __name__ == '__main__':
    arguments = registry.parse()
    pprint({
        "l": listing.value,
        "n": count.value,
        "bar": bar.value,
        "scale": scale.value,
        "x": x.value,
        "arguments": arguments,
    })
