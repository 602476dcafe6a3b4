"""
Usage and help text rendering.

Layout
    usage: copy [-v] -o <dir> <source> <targets>...

    -v, --verbose       be more chatty
    -o, --output <dir>  target directory

    <source>            file to copy from
    <targets>...        files to copy to

- The usage line lists the command, every option in declaration order
  ("[...]" when optional) and every positional ("..." when variadic).
- The description table aligns every description on one column: two spaces
  past the widest label. Continuation lines of multi-line descriptions hang at
  that same column.
- Options come first; a blank line separates them from the positionals.

The column is computed from the specification on every call, so renders stay
correct when declarations change between calls. Nothing here writes anywhere;
Specification.print_help() is the sink.
"""
import textwrap

from .utils import *


def _program(specification, command):
    """
    Resolve the command name: explicit argument, then the specification's
    command, then __prog__ from __main__.
    """
    if (command := trimtonone(command)) is not None:
        return command
    if specification.command is not None:
        return specification.command
    return trimtonone(getattr(__import__("__main__"), "__prog__", None))


def option_label(option, /):
    """
    "-s", "-s, --long", "-s <param>" or "-s, --long <param>".
    """
    label = "-" + option.short_name
    if option.long_name is not None:
        label += ", --" + option.long_name
    if option.is_parameterized:
        label += " <" + option.parameter_name + ">"
    return label


def positional_label(positional, /):
    return "<" + positional.name + ">" + ("..." if positional.is_variadic else "")


def column_width(specification, /):
    """
    Two spaces past the widest option or positional label (2 when nothing is declared).
    """
    widths = [len(option_label(option)) for option in specification.options]
    widths += [len(positional_label(positional)) for positional in specification.positionals]
    return 2 + max(widths, default=0)


def _entry(label, description, width):
    if not description:
        return label
    first, *rest = description.split("\n")
    entry = (label.ljust(width) + first).rstrip()
    if rest:
        # indent() leaves blank lines alone, so no trailing padding sneaks in.
        entry += "\n" + textwrap.indent("\n".join(line.rstrip() for line in rest), " " * width)
    return entry


def render_usage_line(specification, command=None, /):
    """
    Example
    - "usage: tool [-v] -o <file> <input> <more>..."
    """
    parts = ["usage:"]
    if (program := _program(specification, command)) is not None:
        parts.append(program)

    for option in specification.options:
        part = "-" + option.short_name
        if option.is_parameterized:
            part += " <" + option.parameter_name + ">"
        parts.append("[" + part + "]" if option.is_optional else part)

    for positional in specification.positionals:
        parts.append(positional_label(positional))

    return " ".join(parts)


def render_help_body(specification, /):
    """
    The aligned description table (options block, blank line, positionals block).
    """
    width = column_width(specification)
    blocks = []
    if specification.options:
        blocks.append("\n".join(
            _entry(option_label(option), option.description, width) for option in specification.options
        ))
    if specification.positionals:
        blocks.append("\n".join(
            _entry(positional_label(positional), positional.description, width)
            for positional in specification.positionals
        ))
    return "\n\n".join(blocks)


def render_usage(specification, command=None, /):
    """
    Usage line followed, after a blank line, by the description table.
    """
    line = render_usage_line(specification, command)
    if body := render_help_body(specification):
        return line + "\n\n" + body
    return line


def render_help(specification, message=None, /):
    """
    Assemble the full help text.

    Order: custom message and a blank line, header, usage block (explicit
    override or computed), footer. The result is stripped of surrounding
    whitespace.
    """
    text = ""
    if (message := trimtonone(message)) is not None:
        text += message + "\n\n"
    if specification.header is not None:
        text += specification.header + "\n"
    text += specification.usage if specification.usage is not None else render_usage(specification)
    if specification.footer is not None:
        text += "\n" + specification.footer
    return text.strip()


__all__ = (
    "option_label",
    "positional_label",
    "column_width",
    "render_usage_line",
    "render_help_body",
    "render_usage",
    "render_help",
)
