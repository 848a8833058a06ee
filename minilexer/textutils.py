"""Small text helpers shared by the lexer and the shell loop."""

from __future__ import annotations

_INT64_MAX = 2**63 - 1
_BLANKS = " \t"


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def parse_int(text: str) -> int:
    """Parse a decimal integer the way the shell's numeric arguments are read.

    Leading spaces and tabs and one optional sign are accepted.  The digits
    must fit in a signed 64-bit integer and must run to the end of the text.
    The result is wrapped into the signed 32-bit range.  An empty digit run
    yields 0.  Raises ValueError when the text is not a valid number.
    """
    rest = text.lstrip(_BLANKS)
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]

    limit_div, limit_mod = divmod(_INT64_MAX, 10)
    last_allowed = limit_mod + 1 if negative else limit_mod

    value = 0
    consumed = 0
    for char in rest:
        if not "0" <= char <= "9":
            break
        digit = ord(char) - ord("0")
        if value > limit_div or (value == limit_div and digit > last_allowed):
            raise ValueError(f"numeric value out of range: {text!r}")
        value = value * 10 + digit
        consumed += 1

    if consumed != len(rest):
        raise ValueError(f"not a numeric value: {text!r}")
    return _to_int32(-value if negative else value)


def is_blank(line: str) -> bool:
    """Return True when the line holds nothing but spaces and tabs."""
    return all(char in _BLANKS for char in line)