"""
Ordinary faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable identifiers for every user-facing issue.
- ParseError / ParseWarning: base types that carry a message + options, know how
  to render themselves with rich, and serialize to a plain record for logs.
- trigger(): central entry point to surface a fault (raise/warn, or render in
  shell mode).

Error taxonomy
- UnknownArgumentError (UNKNOWN_ARGUMENT): an option token that resolves to no
  declared name or alias; 'argument' is the whole offending token.
- MissingValueError (MISSING_VALUE): a value option with neither an inline value
  nor an eligible following token; 'argument' is the canonical option name.
- Transform failures are not faults: they propagate to the caller untouched.

Host integration (all optional, looked up on __main__)
- __prog__: program name shown in rendered headers.
- __codes__: mapping FaultCode -> label, see FaultCode.normalize().
- __styles__: mapping style-name -> rich style, merged over the defaults.
"""
import os.path
import sys
import warnings
from collections import defaultdict
from enum import StrEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(StrEnum):
    """
    canonical fault codes (stable identifiers).

    - errors
      • UNKNOWN_ARGUMENT, MISSING_VALUE
    - warnings
      • DUPLICATE_DECLARATION

    codes are plain strings so they serialize as-is; normalize() lets the host
    application remap them to its own labels.
    """
    UNKNOWN_ARGUMENT = "UNKNOWN_ARGUMENT"
    MISSING_VALUE = "MISSING_VALUE"

    DUPLICATE_DECLARATION = "DUPLICATE_DECLARATION"

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override the identifiers with friendlier labels; otherwise the code
        itself is returned.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, defaults, /):
    """
    build the rich renderable shared by errors and warnings.

    layout
    - plain:  "[ prog — CODE | Title ]", the message, then "→ hint".
    - fancy:  the same inside a Panel titled by the header.
    """
    main = __import__("__main__")
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    styles = defaultdict(str, defaults | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "ordinary")

    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(fault.code.normalize(), styler("code")),
        " | ",
        text(fault.title.title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))

    parts = [message]
    if fault.hint:
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(fault.hint, styler("hint"))))

    if fancy:
        return Panel(Group(*parts), title=header, title_align="left")

    return Group(header, *parts)


class _Fault:
    """
    shared accessors for errors and warnings.

    every fault stores its message plus a read-only 'options' mapping; the well
    known keys are exposed as properties with per-class fallbacks.
    """
    __code__ = Unset
    __title__ = ""

    @property
    def code(self):
        return self.options.get("code", type(self).__code__)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def hint(self):
        return self.options.get("hint", "")

    @property
    def argument(self):
        return self.options.get("argument", "")

    @property
    def tokens(self):
        return tuple(self.options.get("tokens", ()))

    def serialize(self):
        """
        plain structured record of this fault, suitable for logs and telemetry.

        returns
        - dict with str values for "name", "code", "message", "argument" and a
          list of str for "tokens" (the full original input).
        """
        return {
            "name": type(self).__name__,
            "code": str(self.code),
            "message": self.message,
            "argument": self.argument,
            "tokens": list(self.tokens),
        }

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParseError(_Fault, Exception):
    """
    base class of every parse failure.

    carries
    - message: human-readable sentence (also str(error)).
    - options: read-only mapping with code/title/hint/argument/tokens and the
      rendering switches (shell/fancy/colorful).
    """

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class UnknownArgumentError(ParseError):
    __code__ = FaultCode.UNKNOWN_ARGUMENT
    __title__ = "unknown argument"


class MissingValueError(ParseError):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"


class ParseWarning(_Fault, Warning):
    """
    base class of non-fatal parse diagnostics.

    outside shell mode a warning goes through warnings.warn, attributed to the
    first frame outside this package; in shell mode it is rendered to stderr.
    """

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            warnings.warn(self, skip_file_prefixes=(os.path.dirname(__file__),))
            return
        console.print(self)


class DuplicateDeclarationWarning(ParseWarning):
    __code__ = FaultCode.DUPLICATE_DECLARATION
    __title__ = "duplicate declaration"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - errors raise outside shell mode; in shell mode they are rendered via rich and
      the process exits with status 1. warnings never interrupt the caller.

    typical options
    - shell, fancy, colorful, and any context the reporter may want to show
      (code, title, hint, argument, tokens).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "UnknownArgumentError",
    "MissingValueError",
    "ParseWarning",
    "DuplicateDeclarationWarning",
    "trigger",
)
