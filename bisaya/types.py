"""Type definitions and helpers for Bisaya++.

This module defines the runtime type system used by the interpreter. A
variable is declared with one of four type tags (NUMERO, TIPIK, LETRA,
TINUOD) and every value stored in it must conform to that tag. The helpers
here check values against a tag, name the type of a runtime value, render
values for printing, and parse raw input text for a given tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any
import math
import re


@dataclass(frozen=True)
class TypeSpec:
    """Represents a Bisaya++ type tag.

    `kind` is one of 'NUMERO' (Integer), 'TIPIK' (Float), 'LETRA'
    (Character/String) or 'TINUOD' (Boolean). The keyword spelling is kept
    as the kind so that declarations round-trip without a lookup table.
    """
    kind: str

    def __repr__(self) -> str:
        return self.kind


TYPE_KEYWORDS = ('NUMERO', 'TIPIK', 'LETRA', 'TINUOD')

TRUE_WORD = 'OO'
FALSE_WORD = 'DILI'

_INT_TEXT = re.compile(r'[+-]?\d+')
_FLOAT_TEXT = re.compile(r'[+-]?(\d+(\.\d*)?|\.\d+)')


class NoneVal:
    """Marker object for a declared variable that has not been given a value."""
    def __repr__(self) -> str:
        return 'null'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NoneVal)

    def __hash__(self) -> int:
        return hash(NoneVal)


@dataclass
class ErrorVal:
    """Represents a Bisaya++ error.

    Errors carry a kind name ('SyntaxError', 'DeclarationError',
    'ReferenceError', 'TypeError', 'RuntimeError' or 'InputError'), a
    message, and the source position when one is known.
    """
    name: str
    message: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


def is_number(value: Any) -> bool:
    # bool is a subclass of int; TINUOD values are never numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_value(value: Any, spec: TypeSpec) -> bool:
    """Check whether a runtime value matches a type tag.

    Returns True if the value conforms. Otherwise raises a TypeError (not a
    Bisaya++ error) with a descriptive message; callers wrap it. The check is
    strict: an Integer is not accepted where a TIPIK is declared.
    """
    kind = spec.kind
    if kind == 'NUMERO':
        if isinstance(value, int) and not isinstance(value, bool):
            return True
    elif kind == 'TIPIK':
        if isinstance(value, float):
            return True
    elif kind == 'LETRA':
        if isinstance(value, str):
            return True
    elif kind == 'TINUOD':
        if isinstance(value, bool):
            return True
    else:
        raise TypeError(f"unknown type spec: {spec}")
    raise TypeError(f"expected {kind}, got {type_name(value)}")


def type_name(value: Any) -> str:
    """Return the Bisaya++ type name of a runtime value."""
    if isinstance(value, bool):
        return 'TINUOD'
    if isinstance(value, int):
        return 'NUMERO'
    if isinstance(value, float):
        return 'TIPIK'
    if isinstance(value, str):
        return 'LETRA'
    if isinstance(value, NoneVal):
        return 'unset'
    return type(value).__name__


def format_float(value: float) -> str:
    """Shortest round-trip digits of a float, in positional form with a
    fractional part (`0.00001`, `12345678901234567000.0`).
    """
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), 'f')
    if '.' not in text:
        text += '.0'
    return text


def to_string(value: Any) -> str:
    """Convert a Bisaya++ value to the text shown by IPAKITA."""
    if isinstance(value, bool):
        return TRUE_WORD if value else FALSE_WORD
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NoneVal):
        return 'null'
    return str(value)


def strip_quotes(text: str) -> str:
    """Remove one pair of matching surrounding quotes, if present."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    return text


def convert_input(raw: str, spec: TypeSpec) -> Any:
    """Parse one raw input value according to the declared type tag.

    Raises ValueError when the text cannot be read as that type. LETRA
    accepts any text; surrounding quotes are dropped.
    """
    text = raw.strip()
    kind = spec.kind
    if kind == 'NUMERO':
        if not _INT_TEXT.fullmatch(text):
            raise ValueError(f'cannot read {text!r} as NUMERO')
        return int(text)
    if kind == 'TIPIK':
        if not _FLOAT_TEXT.fullmatch(text):
            raise ValueError(f'cannot read {text!r} as TIPIK')
        return float(text)
    if kind == 'LETRA':
        return strip_quotes(text)
    if kind == 'TINUOD':
        word = strip_quotes(text).upper()
        if word == TRUE_WORD:
            return True
        if word == FALSE_WORD:
            return False
        raise ValueError(f'cannot read {text!r} as TINUOD (expected OO or DILI)')
    raise ValueError(f'unknown type spec: {spec}')
