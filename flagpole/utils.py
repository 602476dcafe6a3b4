"""
Flagpole utilities (token helpers and internal building blocks)

Scope
- Pure, stateless helpers shared by the declaration, formatting and parsing layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level specification/parsing layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- Token helpers
  • isblank / trimtonone: blank and whitespace normalization.
  • unwrap / unquote: strip one symmetric layer of enclosing quotes.
  • parseint: best-effort integer coercion with a fallback.
  • topath: string to pathlib.Path (no file-system checks at this layer).
  • getsafe: indexed access returning a default when out of bounds.

Quick examples
    >>> unquote('"hello"')
    'hello'
    >>> unquote("'x'")
    'x'
    >>> parseint("x", 7)
    7
    >>> getsafe(["a"], 3, "none")
    'none'
"""
import builtins
import functools
import pathlib
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    Returns the given object unless it is the Unset sentinel, in which case the
    provided default is returned. Falsey values like None, 0, "" or [] are
    preserved as-is.

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
    - rename(callable, name) -> callable (updated in place)
    - rename(name) -> decorator

    Some built-in or C-implemented callables are not updatable and will
    raise TypeError.
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
    Recursively copy container values so callers cannot mutate backing state.

    - Sequence (non-string): new tuple with each element processed.
    - Mapping: new dict with values processed (keys preserved).
    - Set: new frozenset.
    - Anything else: returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return frozenset(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns a
    detached copy for container types.

    Example
    - Given self._items, declare items = mirror("items") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


def isblank(text, /):
    """
    True for None and for strings made only of whitespace.
    """
    return text is None or not text.strip()


def trimtonone(text, /):
    """
    Strip surrounding whitespace; blank results collapse to None.

    Examples
    - trimtonone("  a ") -> "a"
    - trimtonone("   ")  -> None
    - trimtonone(None)   -> None
    """
    if text is None:
        return None
    return text.strip() or None


def unwrap(text, quote, /):
    """
    Remove one matching pair of `quote` characters enclosing `text`.

    The text is returned unchanged when it is None, shorter than two characters
    or not symmetrically wrapped by `quote`.

    Examples
    - unwrap('"a b"', '"')  -> 'a b'
    - unwrap('""a""', '"')  -> '"a"'
    - unwrap('"a', '"')     -> '"a'
    """
    if text is None or len(text) < 2:
        return text
    if text[0] == quote and text[-1] == quote:
        return text[1:-1]
    return text


def unquote(text, /):
    """
    Unwrap a single layer of double quotes or, when the text was not double
    quoted, a single layer of single quotes.
    """
    unwrapped = unwrap(text, '"')
    if unwrapped != text:
        return unwrapped
    return unwrap(text, "'")


def parseint(text, default=None, /):
    """
    Best-effort base-10 integer parse of a (possibly padded) string.

    Returns `default` for None, blank or unparseable input.
    """
    if isblank(text):
        return default
    try:
        return int(text.strip())
    except ValueError:
        return default


def topath(text, /):
    """
    Build a pathlib.Path from a string; blank input yields None.

    Existence and file-type checks belong to the caller.
    """
    if isblank(text):
        return None
    return pathlib.Path(text)


def getsafe(sequence, index, default=None, /):
    """
    Indexed access that returns `default` instead of raising.

    Only non-negative indexes inside the sequence resolve; a None sequence
    behaves as empty.
    """
    if sequence is None or not 0 <= index < len(sequence):
        return default
    return sequence[index]


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "isblank",
    "trimtonone",
    "unwrap",
    "unquote",
    "parseint",
    "topath",
    "getsafe",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
