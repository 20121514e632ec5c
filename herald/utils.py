"""
Internal helpers shared by the herald modules.

- Unset: "argument not provided", distinct from None. Falsy, prints as
  "Unset", one instance per process, usable in unions (`str | Unset`).
- coalesce(value, default): materialize a default for Unset only.
- @rename(name): readable names for closures generated at runtime.
- mirror(name): read-only property over the backing field "_name".

Nothing here is re-exported by the package.
"""
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Sentinel type for "not provided".

    A registry toggle defaulting to Unset can tell "left alone" from an
    explicit False, and Ref(Unset) can tell "no initial value" from None.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    # `str | Unset` spells the annotation-like union of str and UnsetType
    def __or__(self, other, /):
        return type(self) | other

    def __ror__(self, other, /):
        return other | type(self)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


def coalesce(object, default=None, /):
    """
    `default` when `object` is Unset; anything else, None included, is kept.
    """
    return object if object is not Unset else default


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of a generated callable.

    Closures built at runtime (the default help renderer, mirrored getters)
    would otherwise all show up as "renderer" or "getter".
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("@rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _freeze(object):
    # containers come back as read-only views; scalars as-is
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(object)
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the backing field "_{name}".

    Container values are exposed as tuple/MappingProxyType/frozenset views so
    callers cannot mutate registry state through the public attribute.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()
"""
Process-wide "not provided" marker. Use coalesce() to materialize defaults.
"""


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
