"""
Parsed arguments: an immutable query view over raw tokens.

A ParsedArguments instance holds the tokens it was built from (None entries
become "") and a reference to the Specification that interprets them. Every
query re-scans the tokens; nothing is cached.

Token grammar
- "-" + short name or "--" + long name selects a declared option (exact match;
  no "-abc" aggregation, no "--name=value", no "--" sentinel).
- A parameterized option takes the token right after it as its value.
- Positional values are the trailing run of tokens after the last recognized
  option (and its parameter, if any). Plain tokens between options are not
  positional values.
- One layer of enclosing double quotes (or, failing that, single quotes) is
  stripped from values.

Failure model
- Queries never raise on odd user input; they answer with the caller's default.
- Asking for an undeclared option issues an UndeclaredOptionWarning and falls
  back to the default as well.
- faults()/validate() is the opt-in pass that checks required options,
  parameters, patterns and positionals.
"""
from .faults import *
from .utils import *


class ParsedArguments:
    """
    Query view produced by Specification.parse().

    Flags and parameters
    - has_option(name), index_of(option), option_at(index), option(name)
    - option_parameter(name, default), option_parameter_as_int(...),
      option_parameter_as_path(...)
    - is_verbose(), is_quiet(), is_help()

    Positionals
    - positionals(), positional(index, default)
    - positionals_as_paths(), positional_as_path(index)

    Raw tokens
    - token_at(index, trim, default), tokens, count, exists(index), is_empty()
    """

    def __init__(self, specification, tokens, /):
        self._specification = specification
        self._tokens = tuple("" if token is None else token for token in (tokens or ()))

    @property
    def specification(self):
        return self._specification

    @property
    def tokens(self):
        """
        A list copy of the normalized tokens.
        """
        return list(self._tokens)

    @property
    def count(self):
        return len(self._tokens)

    def __len__(self):
        return len(self._tokens)

    def __repr__(self):
        return f"ParsedArguments [{" ".join(self._tokens).strip()}]"

    def exists(self, index, /):
        return 0 <= index < len(self._tokens)

    def is_empty(self):
        return not self._tokens

    def _match(self, token):
        for option in self._specification.options:
            if token in option.forms:
                return option
        return None

    def option(self, name, /):
        """
        The declared option for a name ("v", "-v", "verbose" or "--verbose"), or None.
        """
        return self._specification.lookup_option(name)

    def index_of(self, option, /):
        """
        Index of the first token selecting `option` (an Option or a name); -1 when absent.
        """
        if isinstance(option, str):
            option = self._specification.lookup_option(option)
        if option is None:
            return -1
        forms = option.forms
        for index, token in enumerate(self._tokens):
            if token in forms:
                return index
        return -1

    def option_at(self, index, /):
        """
        The declared option selected by the token at `index`, or None.
        """
        token = getsafe(self._tokens, index)
        if token is None:
            return None
        return self._match(token)

    def is_option_at(self, index, /):
        return self.option_at(index) is not None

    def has_option(self, name, /):
        return self.index_of(name) > -1

    def token_at(self, index, /, trim=True, default=None):
        """
        Token at `index` with one layer of quotes removed.

        Negative indexes count from the end. Out-of-range indexes and tokens
        that are empty (after trimming, when `trim` is set) yield `default`.
        """
        if index < 0:
            index += len(self._tokens)
        if not self.exists(index):
            return default
        token = self._tokens[index]
        if trim:
            token = token.strip()
        if not token:
            return default
        return unquote(token)

    def option_parameter(self, name, /, default=None):
        """
        The value following option `name`, or `default`.

        `default` is returned when the option is undeclared (with an
        UndeclaredOptionWarning), takes no parameter, does not occur in the
        tokens, or is the last token. Declared patterns are not checked here;
        see faults().
        """
        if (option := self._specification.lookup_option(name)) is None:
            trigger(UndeclaredOptionWarning(f"option {name!r} is not declared", option=name), stacklevel=4)
            return default
        if not option.is_parameterized:
            return default
        if (index := self.index_of(option)) == -1:
            return default
        value = self.token_at(index + 1)
        return default if value is None else value

    def option_parameter_as_int(self, name, /, default=None):
        return parseint(self.option_parameter(name), default)

    def option_parameter_as_path(self, name, /, default=None):
        """
        The parameter of `name` as a pathlib.Path (no existence checks), or `default`.
        """
        path = topath(self.option_parameter(name))
        return default if path is None else path

    def positionals(self):
        """
        Positional values: the trailing tokens after the last recognized option.

        Tokens are scanned from the end. Anything that is not a declared option
        form is collected. The first declared option stops the scan; if that
        option takes a parameter, the value collected last is its parameter
        and is dropped.

        Example
        - options -o <p> and -f, tokens -f x -o p a b -> ["a", "b"]
        """
        values = []
        for token in reversed(self._tokens):
            option = self._match(token) if token.startswith("-") else None
            if option is None:
                values.append(unquote(token))
                continue
            if option.is_parameterized and values:
                values.pop()
            break
        values.reverse()
        return values

    def positional(self, index, /, default=None):
        return getsafe(self.positionals(), index, default)

    def is_positional_not_blank(self, index, /):
        return not isblank(self.positional(index))

    def positionals_as_paths(self):
        return [topath(value) for value in self.positionals() if not isblank(value)]

    def positional_as_path(self, index, /):
        return topath(self.positional(index))

    def is_verbose(self):
        return self.has_option("v")

    def is_quiet(self):
        return self.has_option("q")

    def is_help(self):
        return self.has_option("h")

    def faults(self):
        """
        Check the tokens against the declared requirements without raising.

        Returns a tuple of
        - MissingOptionError: a non-optional option does not occur;
        - MissingParameterError: a parameterized option has no value after it;
        - PatternMismatchError: a parameter does not fully match its pattern;
        - MissingPositionalError: a non-optional positional got no value.
        """
        faults = []
        for option in self._specification.options:
            if (index := self.index_of(option)) == -1:
                if not option.is_optional:
                    faults.append(MissingOptionError(f"option {option.forms[0]} is required", option=option.short_name))
                continue
            if not option.is_parameterized:
                continue
            if (value := self.token_at(index + 1)) is None:
                faults.append(MissingParameterError(
                    f"option {option.forms[0]} expects <{option.parameter_name}>",
                    option=option.short_name,
                ))
            elif option.parameter_pattern is not None and option.parameter_pattern.fullmatch(value) is None:
                faults.append(PatternMismatchError(
                    f"<{option.parameter_name}> of {option.forms[0]} must match "
                    f"{option.parameter_pattern.pattern!r}, got {value!r}",
                    option=option.short_name,
                    hint=f"pass a value matching {option.parameter_pattern.pattern!r}",
                ))

        count = len(self.positionals())
        for index, positional in enumerate(self._specification.positionals):
            if not positional.is_optional and index >= count:
                faults.append(MissingPositionalError(
                    f"positional <{positional.name}> is required",
                    positional=positional.name,
                ))
        return tuple(faults)

    def validate(self, **options):
        """
        Raise ArgumentsExit carrying every fault, or return self when there are none.

        Options are forwarded to trigger(); with shell=True the faults are
        printed to stderr and the process exits instead.
        """
        if faults := self.faults():
            trigger(ArgumentsExit(faults), **options)
        return self


__all__ = (
    "ParsedArguments",
)
