"""
Flagpole faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the library
  can surface. Codes are grouped by domain to keep logs/searches predictable.
- DeclarationError: programmer mistakes caught while a specification is being
  declared (blank names, duplicates, a second variadic positional, bad patterns).
  Raised immediately by the builder and never recovered internally.
- ArgumentsError / ArgumentsExit: user-input problems found by the opt-in
  validation pass over parsed tokens (missing options, parameters, positionals,
  pattern mismatches). Collected, then raised together as an exception group.
- ArgumentsWarning: soft query-time notices (e.g. asking for an undeclared option).
- trigger(): central entry point to surface any fault (respecting shell/deferred/colorful).

Rendering
- Every fault is a rich renderable: "[ prog — code | title ]", the message, and
  a single " → hint" line.
- The host application may customize the palette (__styles__), the program name
  (__prog__) and code labels (__codes__) from its __main__ module.
"""
import copy
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - declarations (211xx)
      • BLANK_NAME, DUPLICATE_DECLARATION, DUPLICATE_VARIADIC, INVALID_PATTERN
    - validation of parsed tokens (221xx)
      • MISSING_OPTION, MISSING_PARAMETER, PATTERN_MISMATCH, MISSING_POSITIONAL
    - warnings (231xx)
      • UNDECLARED_OPTION

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- declaration errors (21xxx) ---
    BLANK_NAME                  = 21101
    DUPLICATE_DECLARATION       = 21102
    DUPLICATE_VARIADIC          = 21103
    INVALID_PATTERN             = 21104

    # --- validation errors (22xxx) ---
    MISSING_OPTION              = 22101
    MISSING_PARAMETER           = 22102
    PATTERN_MISMATCH            = 22103
    MISSING_POSITIONAL          = 22104

    # --- warnings (23xxx) ---
    UNDECLARED_OPTION           = 23101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_ERROR_STYLES = {
    # header parts
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # neon cyan fault code
    "title": "bold #FF4DA6",  # friendly pinky title

    # body
    "message": "#C8C8D0",  # soft light gray message
    "hint-arrow": "#9CE19C dim",  # gentle green arrow
    "hint": "italic #9CE19C",  # gentle green hint text
}

_WARNING_STYLES = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #FFB400",  # amber fault code for warnings
    "title": "bold #FFC2E0",  # softer pinky title for warnings

    "message": "#D6D6DE",
    "hint-arrow": "#B8EFAF dim",
    "hint": "italic #B8EFAF",
}


def _options(cls, options):
    # Class-level defaults first; call-site options win.
    return MappingProxyType({
        "code": cls.__code__,
        "title": cls.__title__,
        "hint": cls.__hint__,
        "colorful": True,
        "fancy": False,
        "shell": False,
        "deferred": False,
    } | options)


def _program(options):
    return coalesce(options.get("prog", Unset), getattr(__import__("__main__"), "__prog__", "flagpole"))


def _render(fault, palette):
    """
    Build the rich renderable shared by errors and warnings.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options["colorful"]

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    header = Text.assemble(
        "[ ",
        text(_program(fault.options), "prog-name"),
        " — ",
        text(fault.options["code"].normalize(), "code"),
        " | ",
        text(fault.options["title"].title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(fault.options["hint"], "hint"))

    if fault.options["fancy"]:
        try:
            width = int((console.width - 4) * fault.options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(message, hint), title=header, title_align="left", width=width)

    return Group(header, message, hint)


class DeclarationError(ValueError):
    """
    a specification was declared inconsistently (programmer error).

    carries the human message plus read-only options (code, title, hint, and
    any context such as the offending name).
    """
    __code__ = FaultCode.DUPLICATE_DECLARATION
    __title__ = "invalid declaration"
    __hint__ = "fix the specification before parsing arguments"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = _options(type(self), options)

    def __rich__(self):
        return _render(self, _ERROR_STYLES)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        if self.options["deferred"]:
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class BlankNameError(DeclarationError):
    __code__ = FaultCode.BLANK_NAME
    __title__ = "blank name"
    __hint__ = "give every option parameter a non-empty name"


class DuplicateDeclarationError(DeclarationError):
    __code__ = FaultCode.DUPLICATE_DECLARATION
    __title__ = "duplicate declaration"
    __hint__ = "short and long option names must be unique across the specification"


class DuplicateVariadicError(DeclarationError):
    __code__ = FaultCode.DUPLICATE_VARIADIC
    __title__ = "duplicate variadic positional"
    __hint__ = "only one positional may take several values"


class InvalidPatternError(DeclarationError):
    __code__ = FaultCode.INVALID_PATTERN
    __title__ = "invalid pattern"
    __hint__ = "check the regular expression syntax"


class ArgumentsError(Exception):
    """
    parsed tokens do not satisfy the specification (user-input error).

    only produced by the opt-in validation pass; plain queries never raise.
    """
    __code__ = FaultCode.MISSING_OPTION
    __title__ = "invalid arguments"
    __hint__ = "run with --help to see the expected usage"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = _options(type(self), options)

    def __rich__(self):
        return _render(self, _ERROR_STYLES)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        if self.options["deferred"]:
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingOptionError(ArgumentsError):
    __code__ = FaultCode.MISSING_OPTION
    __title__ = "missing option"


class MissingParameterError(ArgumentsError):
    __code__ = FaultCode.MISSING_PARAMETER
    __title__ = "missing parameter"
    __hint__ = "pass the value right after the option"


class PatternMismatchError(ArgumentsError):
    __code__ = FaultCode.PATTERN_MISMATCH
    __title__ = "malformed parameter"


class MissingPositionalError(ArgumentsError):
    __code__ = FaultCode.MISSING_POSITIONAL
    __title__ = "missing positional"


class ArgumentsWarning(Warning):
    """
    soft, query-time notice; the query still answers with its default.
    """
    __code__ = FaultCode.UNDECLARED_OPTION
    __title__ = "suspicious query"
    __hint__ = "declare the option on the specification"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = _options(type(self), options)

    def __rich__(self):
        return _render(self, _WARNING_STYLES)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UndeclaredOptionWarning(ArgumentsWarning):
    __code__ = FaultCode.UNDECLARED_OPTION
    __title__ = "undeclared option"


class ArgumentsExit(ExceptionGroup[ArgumentsError]):
    """
    every fault found by one validation pass, surfaced together.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad arguments", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad arguments", tuple(exceptions))
        self.options = MappingProxyType({"colorful": True, "fancy": False, "shell": False} | options)

    def __rich__(self):
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "title": "bold #FF4DA6",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            if not self.options["colorful"]:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ", text(_program(self.options), "prog-name"), " — ", text(self.message.title(), "title"), " ]"
        )

        renders = []
        for exception in self.exceptions:
            renders.append(copy.replace(exception, ratio=2/3, colorful=self.options["colorful"]))

        if self.options["fancy"]:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - errors are raised unless shell=True, in which case they are printed to
      stderr and the process exits (deferred=True keeps it alive).
    - warnings go through the warnings module unless shell=True.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "DeclarationError",
    "BlankNameError",
    "DuplicateDeclarationError",
    "DuplicateVariadicError",
    "InvalidPatternError",
    "ArgumentsError",
    "MissingOptionError",
    "MissingParameterError",
    "PatternMismatchError",
    "MissingPositionalError",
    "ArgumentsWarning",
    "UndeclaredOptionWarning",
    "ArgumentsExit",
    "trigger",
)
