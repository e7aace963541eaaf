"""
Ordinary utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the specs, the registry and the parser.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the arguments/parser layers.

Overview
- UnsetType / Unset
  • Singleton sentinel meaning “not provided”, so None stays a legitimate default.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; falsey values like None/0/""/[] are kept.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks.

- mirror("attr")
  • Read-only property exposing a private backing field (self._attr); containers
    are handed out as fresh copies so callers cannot mutate a spec through them;
    any other object is handed out as-is.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
import functools
from collections.abc import MutableMapping, MutableSequence, MutableSet
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Option specs use it for 'alias', 'default' and 'transform': a spec declared
    with default=None must keep None as its default, which a None-based “missing”
    marker could not express.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a process-wide singleton.
    """

    def __ror__(self, other, /):
        # str | Unset, for isinstance checks
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns `object` unless it is Unset, in which case `default` is returned.
    None, 0, "" and [] are preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name)           -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Copy mutable containers, recursively; leave everything else untouched.

    - mutable sequence → new list
    - mutable mapping  → new dict (keys preserved, values processed)
    - mutable set      → new set
    - plain tuple      → new tuple (its items may be mutable)
    - anything else    → the very same object (streams, locks, sentinels...)
    """
    if isinstance(object, bytearray):
        return bytearray(object)
    elif isinstance(object, MutableSequence):
        return list(map(_immortalize, object))
    elif isinstance(object, MutableMapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, MutableSet):
        return set(map(_immortalize, object))
    elif type(object) is tuple:
        return tuple(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Container values are returned as fresh copies (see _immortalize), so a spec's
    default list cannot be appended to through the public API.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance (copies and pickles included).
- Distinct from None: a spec with default=None has a default; one with
  default=Unset has none.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
