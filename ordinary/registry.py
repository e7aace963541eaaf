"""
Ordinary option registry.

A Registry compiles the declared options of one parse call into two read-only
lookups:
- names:   canonical name -> OptionSpec
- aliases: one-character alias -> canonical name

Redeclaration policy
- a later declaration reusing a name or an alias wins; the earlier entry is
  replaced (a replaced spec's alias is released) and a
  DuplicateDeclarationWarning is surfaced. every alias therefore always points
  to a registered name.
"""
from collections.abc import Mapping
from types import MappingProxyType

from .arguments import OptionSpec
from .faults import DuplicateDeclarationWarning, trigger


def _coerce(entry, /):
    if isinstance(entry, OptionSpec):
        return entry
    if isinstance(entry, Mapping):
        return OptionSpec(**entry)
    raise TypeError("option declarations must be OptionSpec instances or mappings, not %r" % type(entry).__name__)


class Registry:
    """
    read-only lookup structures for one parse call.

    parameters
    - options: Iterable[OptionSpec | Mapping]
      declared options in order; mappings are coerced with OptionSpec(**mapping).
    - shell: bool (keyword-only)
      render redeclaration warnings to stderr instead of going through warnings.warn.
    """

    def __init__(self, options=(), /, *, shell=False):
        names = {}
        aliases = {}

        for spec in map(_coerce, options):
            if (previous := names.get(spec.name)) is not None:
                trigger(DuplicateDeclarationWarning(
                    "option %r is declared more than once; the last declaration wins" % spec.name,
                    argument=spec.name,
                    hint="remove or rename one of the declarations",
                ), shell=shell)
                if previous.alias is not None and aliases.get(previous.alias) == previous.name:
                    del aliases[previous.alias]

            if spec.alias is not None and (owner := aliases.get(spec.alias)) not in (None, spec.name):
                trigger(DuplicateDeclarationWarning(
                    "alias %r of option %r is already used by option %r; the last declaration wins" % (
                        spec.alias, spec.name, owner
                    ),
                    argument=spec.alias,
                    hint="give one of the options a different alias",
                ), shell=shell)

            names[spec.name] = spec
            if spec.alias is not None:
                aliases[spec.alias] = spec.name

        self._names = names
        self._aliases = aliases

    @property
    def names(self):
        return MappingProxyType(self._names)

    @property
    def aliases(self):
        return MappingProxyType(self._aliases)

    def __iter__(self):
        """
        iterate over the registered specs in declaration order.
        """
        return iter(self._names.values())

    def __len__(self):
        return len(self._names)

    def __contains__(self, name):
        return name in self._names

    def lookup(self, name, /):
        """
        return the spec registered under a canonical name, or None.
        """
        return self._names.get(name)

    def resolve(self, alias, /):
        """
        return the spec owning a one-character alias, or None.
        """
        try:
            return self._names[self._aliases[alias]]
        except KeyError:
            return None

    def __repr__(self):
        return "registry(names=%r, aliases=%r)" % (list(self._names), dict(self._aliases))


__all__ = (
    "Registry",
)
