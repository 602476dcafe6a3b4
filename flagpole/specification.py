"""
Flagpole specification: declare options and positionals, then parse tokens.

What this module provides
- Specification: the aggregate builder. It owns the ordered options and
  positionals, the optional header/usage/footer help fragments, and the
  parse() entry point producing a ParsedArguments view.
- args(tokens): shortcut parsing tokens against an empty specification, for
  callers that only need positional access and raw token queries.

Quick start
    from flagpole import Specification

    spec = (
        Specification()
        .with_command("copy")
        .with_verbose_flag()
        .option("o", "output").with_parameter("dir").optional().with_description("target directory").done()
        .positional("files").variadic().with_description("files to copy").done()
    )

    parsed = spec.parse(["-v", "-o", "out", "a.txt", "b.txt"])
    parsed.is_verbose()               # True
    parsed.option_parameter("output") # "out"
    parsed.positionals()              # ["a.txt", "b.txt"]
    print(spec.render_help())

Lifecycle
- Declaration happens on one thread, before any parse() call; afterwards the
  specification is only read, so it can be shared by concurrent parses.
- Declaration mistakes raise DeclarationError subclasses immediately.
"""
from rich.console import Console

from . import formatting
from .declarations import Option, Positional
from .faults import *
from .parsing import ParsedArguments
from .utils import *


def _strip_hyphens(name):
    if name is None or not name.startswith("-"):
        return name
    return name[2:] if name.startswith("--") else name[1:]


class Specification:
    """
    The declared set of options and positionals plus help text fragments.

    Declaration
    - option(short, long=None) -> Option | None
    - positional(name) -> Positional | None
    - with_verbose_flag(), with_quiet_flag(), with_help_flag() presets

    Help
    - with_header(), with_footer(), with_usage(), with_command()
    - render_help(), print_help()

    Parsing
    - parse(tokens) -> ParsedArguments
    """

    def __init__(self):
        self._options = []
        self._positionals = []
        self._header = None
        self._usage = None
        self._footer = None
        self._command = None

    @property
    def options(self):
        """
        Declared options in declaration order.
        """
        return tuple(self._options)

    @property
    def positionals(self):
        """
        Declared positionals in declaration order.
        """
        return tuple(self._positionals)

    @property
    def header(self):
        return self._header

    @property
    def usage(self):
        return self._usage

    @property
    def footer(self):
        return self._footer

    @property
    def command(self):
        return self._command

    def option(self, short, long=None, /):
        """
        Declare an option, or return the one already declared with that short name.

        Behavior
        - Blank short names declare nothing and return None.
        - A short name already used as another option's long name raises
          DuplicateDeclarationError.
        - Re-declaring a known short name returns the existing option; a long
          name is only applied if the option has none yet, and a different one
          raises DuplicateDeclarationError.
        """
        if (short := trimtonone(short)) is None:
            return None

        for option in self._options:
            if option.short_name != short:
                continue
            long = trimtonone(long)
            if long is not None and option.long_name not in (None, long):
                raise DuplicateDeclarationError(
                    f"option -{short} is already declared with long name {option.long_name!r}",
                    name=short,
                )
            return option.with_long_name(long)

        if self.is_declared_long_option(short):
            raise DuplicateDeclarationError(f"option {short!r} is already declared", name=short)

        option = Option(self, short)
        self._options.append(option)
        try:
            return option.with_long_name(long)
        except DeclarationError:
            self._options.remove(option)
            raise

    def positional(self, name, /):
        """
        Declare the next positional slot; blank names declare nothing and return None.
        """
        if (name := trimtonone(name)) is None:
            return None
        positional = Positional(self, name)
        self._positionals.append(positional)
        return positional

    def _preset(self, short, long, description):
        # A short name declared earlier (by a preset or by hand) is left untouched.
        if self.is_declared_option(short):
            return self
        return self.option(short, long).optional().with_description(description).done()

    def with_verbose_flag(self):
        """
        Add the optional -v/--verbose flag for being more chatty.
        """
        return self._preset("v", "verbose", "be more chatty")

    def with_quiet_flag(self):
        """
        Add the optional -q/--quiet flag for being as quiet as possible.
        """
        return self._preset("q", "quiet", "be as quiet as possible")

    def with_help_flag(self):
        return self._preset("h", "help", "show the help information")

    def is_declared_option(self, short, /):
        return any(option.short_name == short for option in self._options)

    def is_declared_long_option(self, long, /):
        return long is not None and any(option.long_name == long for option in self._options)

    def lookup_option(self, name, /):
        """
        Find an option by short name first, then by long name.

        Leading hyphens are ignored, so "v", "-v" and "--verbose" all resolve
        the verbose flag. Returns None for undeclared names.
        """
        name = _strip_hyphens(name)
        for option in self._options:
            if option.short_name == name:
                return option
        return self.lookup_long_option(name)

    def lookup_long_option(self, long, /):
        if long is None:
            return None
        for option in self._options:
            if option.long_name == long:
                return option
        return None

    def with_header(self, text, /):
        self._header = text
        return self

    def with_footer(self, text, /):
        self._footer = text
        return self

    def with_usage(self, text, /):
        """
        Replace the computed usage block with an explicit one ("usage: " is prepended).

        None restores the computed usage block.
        """
        self._usage = None if text is None else "usage: " + text
        return self

    def with_command(self, name, /):
        """
        Name the command shown at the start of the computed usage line.
        """
        self._command = trimtonone(name)
        return self

    def render_usage(self, command=None, /):
        return formatting.render_usage(self, command)

    def render_help(self, message=None, /):
        return formatting.render_help(self, message)

    def print_help(self, message=None, /, *, stderr=False):
        """
        Write the help text to stdout (or stderr) through a rich console.

        Markup, emoji codes, highlighting and hard wrapping are disabled so the
        text is printed verbatim.
        """
        Console(stderr=stderr).print(
            self.render_help(message),
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )

    def parse(self, tokens, /):
        """
        Apply this specification to a raw token list (None is treated as empty).
        """
        return ParsedArguments(self, tokens)

    def __repr__(self):
        return f"specification(options={self.options!r}, positionals={self.positionals!r})"


def args(tokens, /):
    """
    Parse tokens against an empty specification.

    Every token is then a positional value; raw access goes through
    ParsedArguments.token_at().
    """
    return Specification().parse(tokens)


__all__ = (
    "Specification",
    "args",
)
