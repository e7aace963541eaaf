r"""
Ordinary option specifications and decorators.

Overview
- Specs
  • OptionSpec: a declared option (canonical name, optional one-character alias,
    kind, default, duplicate policy and transform).
  • Flag: presence-only option (kind="flag"), e.g. --verbose / -v / --no-verbose.
  • Option: value-bearing option (kind="value"), e.g. --output=FILE / -oFILE / -o FILE.
  OptionSpec(...) dispatches on 'kind', so OptionSpec("out", "value") is an Option.

- Policies
  • Kind: "flag" | "value".
  • Duplicates: "accumulate" | "last-wins" | "first-wins" (how repeated
    occurrences of the same option are merged; "last-wins" by default).

- Decorators
  • @flag(...) / @option(...): build a spec and bind the decorated function as its
    transform. The function name becomes the option name when none is given.

Metadata (sanitized on construction)
- name: non-empty string without whitespace or '=', not starting with '-'.
- alias: Unset/None or exactly one character (not '-', '=' or whitespace).
- kind: coerced to Kind; Flag/Option refuse the other kind.
- default: any value, including None; Unset means “no default”.
- duplicate_handling: coerced to Duplicates.
- transform: Unset/None or a callable applied once to the final value.

Calling a spec applies its transform:
    >>> from ordinary.arguments import option
    >>> @option(alias="n", default="0")
    ... def count(value):
    ...     return int(value)
    ...
    >>> count("42")
    42

Public API
- Classes: OptionSpec, Flag, Option, Kind, Duplicates
- Decorators: flag, option
"""
import functools
import operator
import re
from enum import StrEnum

from .utils import *
from .utils import _immortalize


class Kind(StrEnum):
    """
    option kind: presence-only switch or value-bearing option.
    """
    FLAG = "flag"
    VALUE = "value"


class Duplicates(StrEnum):
    """
    policy for repeated occurrences of one option.

    - ACCUMULATE: a second occurrence turns the stored value into a list, later
      occurrences append to it (a single occurrence is never wrapped).
    - LAST_WINS: later occurrences overwrite earlier ones.
    - FIRST_WINS: later occurrences are discarded.
    """
    ACCUMULATE = "accumulate"
    LAST_WINS = "last-wins"
    FIRST_WINS = "first-wins"


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only records.

    Responsibilities
    - Expose the fields listed in __introspectable__ as read-only properties
      backed by "_{name}" attributes (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics;
      __displayable__ (if set) narrows or extends what they show.
    - Derive __typename__ from the class name ("OptionSpec" -> "option-spec"),
      used as the subject of sanitization messages.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - option(name='output', alias='o', kind=<Kind.VALUE: 'value'>, ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate option metadata in place.

    Raises
    - TypeError: a field has the wrong type (name/alias not strings, transform
      not callable).
    - ValueError: a field has a bad value (empty or malformed name, alias longer
      than one character, unknown kind or duplicate policy, kind conflicting with
      the class).
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\s=-][^\s=]*", name):
        raise ValueError(f"{cls.__typename__} 'name' must not start with '-' nor contain '=' or whitespace")

    if (alias := metadata["alias"]) is None:
        alias = Unset
    if not isinstance(alias, str | Unset):
        raise TypeError(f"{cls.__typename__} 'alias' must be a string")
    elif isinstance(alias, str) and (len(alias) != 1 or alias in "-=" or alias.isspace()):
        raise ValueError(f"{cls.__typename__} 'alias' must be a single character other than '-', '=' or whitespace")
    metadata["alias"] = coalesce(alias)

    # Flag/Option pin their kind; the generic OptionSpec defaults to a flag.
    kind = coalesce(metadata["kind"], cls.__kind__)
    try:
        kind = Kind(kind)
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'kind' must be one of 'flag' or 'value'") from None
    if cls is not OptionSpec and kind is not cls.__kind__:
        raise ValueError(f"{cls.__typename__} 'kind' cannot be {kind.value!r}")
    metadata["kind"] = kind

    try:
        metadata["duplicate_handling"] = Duplicates(metadata["duplicate_handling"])
    except ValueError:
        raise ValueError(
            f"{cls.__typename__} 'duplicate_handling' must be one of 'accumulate', 'last-wins' or 'first-wins'"
        ) from None

    if (transform := metadata["transform"]) is None:
        transform = Unset
    if transform is not Unset and not callable(transform):
        raise TypeError(f"{cls.__typename__} 'transform' must be callable")
    metadata["transform"] = coalesce(transform)


class OptionSpec(metaclass=ArgumentType):
    """
    Declared option specification.

    An OptionSpec tells the parser how to recognise an option (canonical long
    name and optional short alias), whether it carries a value, how repeated
    occurrences are merged, what to fall back to when absent and how to
    post-process the final value.

    Construction dispatches on 'kind': the returned object is always a Flag or
    an Option, so isinstance(spec, Flag) is the canonical kind check.

    Properties (read-only)
    - name, alias (None when not declared), kind, duplicate_handling,
      transform (None when not declared)
    - default: the declared default (containers copied), Unset when none was declared
    - has_default: whether a default was declared (None counts)
    """

    __kind__ = Kind.FLAG

    __introspectable__ = (
        "name",
        "alias",
        "kind",
        "duplicate_handling",
        "transform",
    )

    __displayable__ = (
        "name",
        "alias",
        "kind",
        "default",
        "duplicate_handling",
        "transform",
    )

    def __new__(
            cls,
            name,
            kind=Unset,
            *,
            alias=Unset,
            default=Unset,
            duplicate_handling=Duplicates.LAST_WINS,
            transform=Unset,
    ):
        """
        Construct a Flag or an Option from the provided metadata.

        Parameters
        - name: str
          Canonical option name, matched by --name (and --no-name for flags).
        - kind: "flag" | "value" | Kind
          Defaults to the class' own kind ("flag" for OptionSpec itself).
        - alias: str
          One-character short name, matched by -x and inside clusters (-xyz).
        - default: Any
          Stored when the option never occurs; transform-eligible. Not validated.
        - duplicate_handling: "accumulate" | "last-wins" | "first-wins" | Duplicates
        - transform: Callable[[Any], Any]
          Applied exactly once to the final (parsed or default) value.
        """
        metadata = {
            "name": name,
            "alias": alias,
            "kind": kind,
            "default": default,
            "duplicate_handling": duplicate_handling,
            "transform": transform,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__({Kind.FLAG: Flag, Kind.VALUE: Option}[metadata["kind"]])

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        return self

    def __call__(self, value, /):
        """
        Apply the transform to a final value (identity when none was declared).

        Exceptions raised by the transform propagate untouched.
        """
        if self._transform is None:
            return value
        return self._transform(value)

    def __eq__(self, other):
        if not isinstance(other, OptionSpec):
            return NotImplemented
        return (
            self._name == other._name and
            self._alias == other._alias and
            self._kind is other._kind and
            self._default == other._default and
            self._duplicate_handling is other._duplicate_handling and
            self._transform == other._transform
        )

    def __hash__(self):
        return hash((self._name, self._alias, self._kind))

    def __setattr__(self, name, value, /):
        # Fields are written once by __new__; afterwards the spec is frozen.
        if name in self.__dict__:
            raise AttributeError(f"{type(self).__typename__} is read-only")
        object.__setattr__(self, name, value)

    @property
    def default(self):
        """
        The declared default (Unset when none was declared); mutable containers
        are copied, any other object is returned as-is.
        """
        return _immortalize(self._default)

    @property
    def has_default(self):
        return self._default is not Unset


class Flag(OptionSpec):
    """
    Presence-only option: stores True when seen, False via --no-name or name=false.
    """
    __kind__ = Kind.FLAG

    def __new__(cls, name, kind=Unset, **options):
        return super().__new__(cls, name, kind, **options)


class Option(OptionSpec):
    """
    Value-bearing option: stores the string attached to (or following) it.
    """
    __kind__ = Kind.VALUE

    def __new__(cls, name, kind=Unset, **options):
        return super().__new__(cls, name, kind, **options)


def _decorator(spec, typename, /):
    """
    Internal: build a decorator that binds the decorated function as the transform.

    The spec is constructed eagerly (without transform) so malformed metadata
    fails at declaration time rather than at decoration time.
    """

    def factory(name=Unset, /, **options):
        if "transform" in options:
            raise TypeError(f"@{typename}() binds the decorated function as 'transform'")
        if name is not Unset:
            spec(name, **options)

        @rename(typename)
        def wrapper(transform, /):
            if not callable(transform):
                raise TypeError(f"@{typename}() must be applied to a callable")
            return spec(coalesce(name, transform.__name__.replace("_", "-")), transform=transform, **options)

        return wrapper

    return rename(factory, typename)


flag = _decorator(Flag, "flag")
flag.__doc__ = """
    Decorator for a flag whose final value is post-processed.

    Usage
        @flag(alias="c", default=True)
        def colors(value):
            return "always" if value else "never"

    The decorated function becomes the transform; the decorator returns the Flag.
    Without an explicit name, the function name is used (underscores -> hyphens).
"""

option = _decorator(Option, "option")
option.__doc__ = """
    Decorator for a value option whose final value is post-processed.

    Usage
        @option("count", alias="n", default="0", duplicate_handling="first-wins")
        def count(value):
            return int(value)

    The decorated function becomes the transform; the decorator returns the Option.
    Without an explicit name, the function name is used (underscores -> hyphens).
"""


__all__ = (
    # Classes (specifications)
    "OptionSpec",
    "Flag",
    "Option",

    # Policies
    "Kind",
    "Duplicates",

    # Decorators (bind a transform)
    "flag",
    "option",
)

# Not part of the public API.
del ArgumentType
