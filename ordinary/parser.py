"""
Ordinary parser: GNU/POSIX-style tokens to a ParseResult.

What this module provides
- parse(tokens, options): the single entry point. Builds a fresh Registry, runs
  one left-to-right scan, then the default and transform passes.
- Parser: the scan itself (one instance per call, never reused).

Token forms understood
- positional:  file.txt, -, -5, -2.5 (numbers are never options)
- terminator:  --            (everything after it is positional, verbatim)
- long:        --name, --name=value, --name value, --no-name (flags only)
- short:       -x, -x=value, -x value, -xvalue, -abc (cluster), -abc value

Value attribution
- a flag never consumes the next token; "=false" stores False, anything else True.
- a value option takes, in order: its inline "=value", the rest of its cluster
  when it is not the last cluster member, or the next token when that token is
  positional. Otherwise the option is missing its value.

Strictness
- unknown long options, unknown --no-x targets and an unknown last cluster
  member raise UnknownArgumentError; unknown members before the last one of a
  cluster are skipped silently.
- "--no-x" is unknown unless x is a declared flag, with one exception: when an
  option literally named "no-x" is declared, "--no-x" resolves to that option.
- all faults abort the parse: no partial result is ever returned.
"""
import difflib

from .arguments import Duplicates, Flag
from .faults import MissingValueError, UnknownArgumentError, trigger
from .registry import Registry
from .results import ParseResult
from .tokens import TokenKind, classify, is_value
from .utils import Unset

NEGATION = "no-"


class Parser:
    """
    single-use scanner over one token sequence.

    parameters
    - registry: Registry
      lookups for the declared options (read-only during the scan).
    - tokens: Iterable[str]
      raw tokens; materialized once and reported back in faults.
    - shell, fancy, colorful: bool (keyword-only)
      fault surfacing switches forwarded to trigger().

    state
    - self._index always points at the token being resolved; resolvers that
      consume a following value move it forward, the scan loop steps past it.
    """

    def __init__(self, registry, tokens, /, *, shell=False, fancy=False, colorful=True):
        self._registry = registry
        self._tokens = tuple(tokens)
        self._index = 0
        self._result = ParseResult()
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful

    def trigger(self, fault, /, **options):
        trigger(
            fault,
            **options,
            tokens=self._tokens,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful
        )

    def _unknown(self, token):
        """
        report an option token that resolves to nothing declared.
        """
        if token.startswith("--"):
            name = token[2:].partition("=")[0]
            if name.startswith(NEGATION) and name not in self._registry:
                name = name[len(NEGATION):]
            suggestions = ["--" + match for match in difflib.get_close_matches(name, self._registry.names.keys(), 3)]
        else:
            suggestions = ["-" + alias for alias in sorted(self._registry.aliases)]

        if token.startswith("--") and suggestions:
            hint = "did you mean %r?" % suggestions[0]
        elif suggestions:
            hint = "declared short options are %s" % ", ".join(suggestions)
        else:
            hint = "check the spelling, or pass it after '--' to keep it as a positional"

        self.trigger(UnknownArgumentError(
            "Unknown argument '%s'." % token,
            argument=token,
            suggestions=suggestions,
            hint=hint,
        ))

    def _missing(self, spec):
        """
        report a value option that received no value.
        """
        following = self._index + 1
        if following < len(self._tokens):
            hint = "the next token %r is not a value; use --%s=<value> to pass it anyway" % (
                self._tokens[following], spec.name
            )
        else:
            hint = "add a value after it (for example: --%s=<value>)" % spec.name

        self.trigger(MissingValueError(
            "Argument '%s' requires a value." % spec.name,
            argument=spec.name,
            hint=hint,
        ))

    def _take(self, spec):
        """
        consume the following token as the value of 'spec'.

        only a positional token qualifies; the end of input, an option-looking
        token or the terminator is a missing value.
        """
        following = self._index + 1
        if following < len(self._tokens) and is_value(value := self._tokens[following]):
            self._index = following
            return value
        self._missing(spec)

    def _store(self, spec, value):
        """
        merge a resolved value into the result under the spec's canonical name.

        duplicate policy
        - first occurrence: stored as-is (never wrapped in a list).
        - "first-wins": later values are discarded.
        - "last-wins": later values overwrite.
        - "accumulate": a list is extended; any other stored value becomes
          [stored, value].
        """
        options = self._result.options

        if spec.name not in options:
            options[spec.name] = value
            return

        match spec.duplicate_handling:
            case Duplicates.FIRST_WINS:
                pass
            case Duplicates.LAST_WINS:
                options[spec.name] = value
            case Duplicates.ACCUMULATE:
                if isinstance(existing := options[spec.name], list):
                    existing.append(value)
                else:
                    options[spec.name] = [existing, value]

    def _parse_long(self, token):
        """
        resolve a "--..." token.

        order
        - "--no-name": False for a declared flag 'name'; when 'name' is not a
          flag, "no-name" itself must be declared, otherwise the token is unknown.
        - "--name[=value]": flags store inline != "false"; value options take
          the inline value (even "") or the following positional token.
        """
        name, equals, inline = token[2:].partition("=")
        inline = inline if equals else Unset

        if name.startswith(NEGATION):
            if isinstance(spec := self._registry.lookup(name[len(NEGATION):]), Flag):
                return self._store(spec, False)
            if name not in self._registry:
                return self._unknown(token)

        if (spec := self._registry.lookup(name)) is None:
            return self._unknown(token)

        if isinstance(spec, Flag):
            return self._store(spec, inline != "false")

        if inline is Unset:
            inline = self._take(spec)
        self._store(spec, inline)

    def _parse_short(self, token):
        """
        resolve a "-..." token, one cluster member at a time.

        members before the last
        - unknown: skipped; flag: True; value option: takes the rest of the
          cluster (up to any "=") as its value and ends the cluster.
        the last member
        - unknown: the whole token is unknown; flag: inline != "false";
          value option: inline value, else the following positional token.
        """
        cluster, equals, inline = token[1:].partition("=")
        inline = inline if equals else Unset

        if not cluster:
            return self._unknown(token)

        last = len(cluster) - 1
        for position, alias in enumerate(cluster):
            spec = self._registry.resolve(alias)

            if position < last:
                if spec is None:
                    continue
                if isinstance(spec, Flag):
                    self._store(spec, True)
                    continue
                return self._store(spec, cluster[position + 1:])

            if spec is None:
                return self._unknown(token)
            if isinstance(spec, Flag):
                return self._store(spec, inline != "false")
            if inline is Unset:
                inline = self._take(spec)
            self._store(spec, inline)

    def _finalize(self):
        """
        fill declared defaults for options never seen, then apply transforms.

        - container defaults (lists, dicts, sets) are copied, so a mutable default
          is never shared between calls; any other default (a stream, a lock, a
          sentinel) is stored as the very same object.
        - every stored key is transformed exactly once, defaults included;
          transform exceptions propagate untouched.
        """
        options = self._result.options

        for spec in self._registry:
            if spec.name not in options and spec.has_default:
                options[spec.name] = spec.default

        for spec in self._registry:
            if spec.name in options:
                options[spec.name] = spec(options[spec.name])

    def parse(self):
        """
        run the scan, then the default and transform passes.

        returns
        - ParseResult
        """
        while self._index < len(self._tokens):
            token = self._tokens[self._index]

            match classify(token):
                case TokenKind.TERMINATOR, _:
                    self._result.positional.extend(self._tokens[self._index + 1:])
                    break
                case TokenKind.POSITIONAL, _:
                    self._result.positional.append(token)
                case TokenKind.OPTION, 2:
                    self._parse_long(token)
                case TokenKind.OPTION, 1:
                    self._parse_short(token)
                case _:
                    # three or more hyphens: no declared spelling can match
                    self._unknown(token)

            self._index += 1

        self._finalize()
        return self._result


def parse(tokens=(), options=(), *, shell=False, fancy=False, colorful=True):
    """
    parse raw command-line tokens against declared options.

    parameters
    - tokens: Iterable[str]
      typically sys.argv[1:] (program name already removed; the shell has
      already expanded globs and quotes).
    - options: Iterable[OptionSpec | Mapping]
      declared options; mappings are coerced with OptionSpec(**mapping).
    - shell: bool (keyword-only)
      when True, faults are rendered to stderr with rich and the process exits
      with status 1 instead of raising.
    - fancy, colorful: bool (keyword-only)
      rendering switches for shell mode (panel chrome, colors).

    returns
    - ParseResult

    raises
    - UnknownArgumentError, MissingValueError (outside shell mode).
    - whatever a transform raises, untouched.
    - TypeError when tokens is a bare string or holds non-strings.

    example
        >>> from ordinary import parse, Flag, Option
        >>> parse(["-am", "Initial commit", "file.js"], [
        ...     Flag("all", alias="a"),
        ...     Option("message", alias="m", default=""),
        ... ]).to_dict()
        {'_': ['file.js'], 'all': True, 'message': 'Initial commit'}
    """
    if isinstance(tokens, str):
        raise TypeError("parse() tokens must be an iterable of strings, not a string")
    tokens = tuple(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() tokens must be strings, not %r" % type(token).__name__)

    registry = Registry(options, shell=shell)
    return Parser(registry, tokens, shell=shell, fancy=fancy, colorful=colorful).parse()


__all__ = (
    "Parser",
    "parse",
)
