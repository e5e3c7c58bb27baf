"""
Escaping primitives for generated code.

Two escapers with different targets; never apply one where the other is
meant, and never run either over its own output.
"""
import re
from typing import Optional

# Characters the shell never treats specially outside quotes
_PLAIN_SHELL_WORD = re.compile(r"[A-Za-z0-9._-]+")


def escape_shell(value: Optional[str]) -> str:
    """
    Escape a value for use inside a single-quoted shell string.

    Each ``'`` becomes ``'\\''`` (close quote, escaped quote, reopen quote),
    so ``O'Brien`` renders as ``'O'\\''Brien'``.
    """
    if value is None or not isinstance(value, str):
        return ""
    return value.replace("'", "'\\''")


def shell_quote(value: Optional[str]) -> str:
    """Wrap an escaped value in single quotes."""
    return "'" + escape_shell(value) + "'"


def shell_word(value: Optional[str]) -> str:
    """
    Render ``value`` as a single shell word.

    Plain tokens such as HTTP method names are left bare; anything else is
    single-quoted so it cannot split into several words or commands.
    """
    if value and _PLAIN_SHELL_WORD.fullmatch(value):
        return value
    return shell_quote(value)


def escape_js(value: Optional[str]) -> str:
    """
    Escape a value for a single-quoted JavaScript string literal.

    Handles backslash, single quote, newline, carriage return and tab.
    Backslashes are escaped first.
    """
    if value is None or not isinstance(value, str):
        return ""
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def js_quote(value: Optional[str]) -> str:
    return "'" + escape_js(value) + "'"
