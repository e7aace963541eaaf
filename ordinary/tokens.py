"""
Ordinary token classification.

Every raw token falls into exactly one TokenKind:
- TERMINATOR: the literal "--"; everything after it is positional.
- OPTION: starts with '-' and is neither a bare '-' nor a number; carries the
  length of its leading hyphen run (1 = short form, 2 = long form).
- POSITIONAL: anything else, including "-", "" and numbers such as "-5" or "-2.5".

Numbers are checked before the leading hyphen, so negative integers and floats
are never mistaken for short options, regardless of the declared options.
"""
import re
from enum import Enum

TERMINATOR = "--"

_NUMERIC = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_HYPHENS = re.compile(r"-*")


class TokenKind(Enum):
    TERMINATOR = "terminator"
    OPTION = "option"
    POSITIONAL = "positional"


def classify(token, /):
    """
    classify a raw token.

    returns
    - tuple[TokenKind, int]: the kind and the number of leading hyphens
      (0 unless the kind is OPTION).

    examples
    - classify("--")        -> (TERMINATOR, 0)
    - classify("-")         -> (POSITIONAL, 0)
    - classify("-2.5")      -> (POSITIONAL, 0)
    - classify("-vqf")      -> (OPTION, 1)
    - classify("--out=a")   -> (OPTION, 2)
    - classify("file.txt")  -> (POSITIONAL, 0)
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string, not %r" % type(token).__name__)
    if token == TERMINATOR:
        return TokenKind.TERMINATOR, 0
    if len(token) < 2:
        return TokenKind.POSITIONAL, 0
    if _NUMERIC.fullmatch(token):
        return TokenKind.POSITIONAL, 0
    if token.startswith("-"):
        return TokenKind.OPTION, _HYPHENS.match(token).end()
    return TokenKind.POSITIONAL, 0


def is_value(token, /):
    """
    whether a token may be consumed as the value of a preceding option.

    only positional tokens qualify: an option-looking token or the terminator
    following a value option means that option is missing its value.
    """
    return classify(token)[0] is TokenKind.POSITIONAL


__all__ = (
    "TERMINATOR",
    "TokenKind",
    "classify",
    "is_value",
)
