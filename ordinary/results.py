"""
Ordinary parse results.

A ParseResult holds:
- positional: list[str], in input order (everything after "--" included).
- options: dict[str, Any], keyed by canonical option names only.

The canonical flat shape, shared with plain dicts, is {"_": positional, **options}:
result["_"] is the positional list and result[name] an option value.
"""
from collections.abc import Mapping

POSITIONAL_KEY = "_"


class ParseResult:
    """
    structured outcome of one parse call.

    equality
    - two results are equal when their positional lists and options are equal.
    - a result also equals a mapping in the flat {"_": [...], **options} shape;
      a mapping without "_" compares as if "_" were an empty list.
    """
    __slots__ = ("positional", "options")

    def __init__(self, positional=(), options=()):
        self.positional = list(positional)
        self.options = dict(options)

    def __getitem__(self, name, /):
        if name == POSITIONAL_KEY:
            return self.positional
        return self.options[name]

    def get(self, name, default=None, /):
        try:
            return self[name]
        except KeyError:
            return default

    def __contains__(self, name, /):
        return name == POSITIONAL_KEY or name in self.options

    def __iter__(self):
        """
        iterate over the stored option names (the positional key excluded).
        """
        return iter(self.options)

    def __len__(self):
        return len(self.options)

    def to_dict(self):
        """
        return the flat {"_": positional, **options} dict (shallow copies).
        """
        return {POSITIONAL_KEY: list(self.positional)} | self.options

    def __eq__(self, other):
        if isinstance(other, ParseResult):
            return self.positional == other.positional and self.options == other.options
        if isinstance(other, Mapping):
            return self.to_dict() == {POSITIONAL_KEY: []} | dict(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return "parse-result(positional=%r, options=%r)" % (self.positional, self.options)

    def __rich_repr__(self):
        yield "positional", self.positional
        yield "options", self.options


__all__ = (
    "POSITIONAL_KEY",
    "ParseResult",
)
