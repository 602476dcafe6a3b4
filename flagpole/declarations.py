r"""
Flagpole declarations: options and positionals of a specification.

Overview
- Option: a flag-style argument with a short form (-x), an optional long form
  (--xyz), and optionally a parameter consumed from the following token.
- Positional: a trailing, non-flag argument slot; at most one per specification
  may be variadic.

Both are created by a Specification (see flagpole.specification) and never on
their own. Each keeps an explicit reference back to the specification that owns
it, so a declaration chain can always return to the aggregate:

    >>> spec = Specification()
    >>> spec.option("o", "output").with_parameter("file").optional().done() is spec
    True

Mutation
- Fields are exposed as read-only properties (see __introspectable__).
- The fluent setters (with_*, optional, variadic) are the only way to change a
  declaration, and they validate against the owning specification immediately.

Validation highlights
- Long names must be unique across the specification (short and long forms
  together, so "-x" and "--x" cannot name different options).
- Parameter names must be non-blank.
- Patterns are compiled eagerly; invalid syntax fails at declaration time.
- Only one positional may be variadic.
"""
import functools
import operator
import re

from .faults import *
from .utils import *


class DeclarationType(type):
    """
    Metaclass wiring read-only properties and stable representations.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the "_<name>" attribute (via mirror()).
    - Derive __typename__ from the class name for messages.
    - Provide __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()

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
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - option(short_name='v', long_name='verbose', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Option(metaclass=DeclarationType):
    """
    A recognized flag, e.g. -v/--verbose or -o/--output <file>.

    Properties
    - short_name: str, matched as "-" + short_name.
    - long_name: str | None, matched as "--" + long_name.
    - parameter_name: str | None; when set the option consumes the next token.
    - parameter_pattern: re.Pattern | None; recorded for help and for the
      opt-in validation pass, never consulted by plain parameter queries.
    - is_optional: whether the option may be left out (help rendering and
      validation only; parsing does not require anything).
    - description: str | None, may span several lines.
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "parameter_name",
        "parameter_pattern",
        "is_optional",
        "description",
    )

    def __init__(self, specification, short, /):
        self._specification = specification
        self._short_name = short
        self._long_name = None
        self._parameter_name = None
        self._parameter_pattern = None
        self._is_optional = False
        self._description = None

    @property
    def specification(self):
        """
        The Specification owning this option.
        """
        return self._specification

    @property
    def is_parameterized(self):
        return self._parameter_name is not None

    @property
    def forms(self):
        """
        The exact tokens that select this option ("-x" and, if any, "--xyz").
        """
        if self._long_name is None:
            return ("-" + self._short_name,)
        return ("-" + self._short_name, "--" + self._long_name)

    def with_long_name(self, name, /):
        """
        Set the long form; blank names are ignored.

        Raises DuplicateDeclarationError when another option already uses the
        name (as long form or as short form).
        """
        if (name := trimtonone(name)) is None:
            return self
        for option in self._specification.options:
            if option is self:
                continue
            if name in (option.long_name, option.short_name):
                raise DuplicateDeclarationError(
                    f"long option {name!r} is already used by {option.forms[0]}",
                    name=name,
                )
        self._long_name = name
        return self

    def with_parameter(self, name, /):
        """
        Make the option consume the next token as its parameter.

        Raises BlankNameError when the parameter name is blank.
        """
        if (name := trimtonone(name)) is None:
            raise BlankNameError(f"parameter of {self.forms[0]} must have a name", option=self.short_name)
        self._parameter_name = name
        return self

    def with_pattern(self, regex, /):
        """
        Record a validation pattern for the parameter (None clears it).

        The expression is compiled right away; InvalidPatternError wraps re.error.
        """
        if regex is None:
            self._parameter_pattern = None
            return self
        try:
            self._parameter_pattern = re.compile(regex)
        except re.error as error:
            raise InvalidPatternError(
                f"pattern {regex!r} of {self.forms[0]} does not compile: {error}",
                option=self.short_name,
            ) from error
        return self

    def optional(self, flag=True, /):
        self._is_optional = bool(flag)
        return self

    def with_description(self, description, /):
        self._description = description
        return self

    def done(self):
        """
        Return to the owning specification (end of a declaration chain).
        """
        return self._specification

    def __str__(self):
        return "option " + self.forms[0]


class Positional(metaclass=DeclarationType):
    """
    A trailing argument slot, e.g. <source> or <files>....

    Properties
    - name: str, rendered as "<name>".
    - is_optional: whether the slot may be left empty.
    - is_variadic: whether the slot may take several values (one per specification).
    - description: str | None, may span several lines.
    """

    __introspectable__ = (
        "name",
        "is_optional",
        "is_variadic",
        "description",
    )

    def __init__(self, specification, name, /):
        self._specification = specification
        self._name = name
        self._is_optional = False
        self._is_variadic = False
        self._description = None

    @property
    def specification(self):
        return self._specification

    def variadic(self):
        """
        Let this slot take several values.

        Raises DuplicateVariadicError when another positional already does.
        """
        for positional in self._specification.positionals:
            if positional is not self and positional.is_variadic:
                raise DuplicateVariadicError(
                    f"positional <{positional.name}> is already variadic",
                    name=self._name,
                )
        self._is_variadic = True
        return self

    def optional(self, flag=True, /):
        self._is_optional = bool(flag)
        return self

    def with_description(self, description, /):
        self._description = description
        return self

    def done(self):
        return self._specification

    def __str__(self):
        return "positional <" + self._name + ">"


__all__ = (
    "Option",
    "Positional",
)

# Not part of the public API.
del DeclarationType
