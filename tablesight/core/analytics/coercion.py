"""Scalar coercion predicates.

Each test the extractor and the type inferrer rely on is a separate
function here, so their precedence is decided by the callers and each one
can be checked on its own.
"""

import math
import re
from datetime import date, datetime
from typing import Optional, Union

from dateutil import parser as date_parser

from .types import Scalar, is_number

# Plain decimal or scientific literal, no thousands separators
NUMERIC_LITERAL = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?$")
INTEGER_LITERAL = re.compile(r"^[-+]?\d+$")
# "007", "-01.5": numeric-looking but usually identifiers or codes
REDUNDANT_LEADING_ZERO = re.compile(r"^[-+]?0\d")

BOOLEAN_LITERALS = {"true", "false"}

# Two defaults that differ in every date field; a component that changes
# between them was not present in the parsed string.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def is_numeric_literal(text: str) -> bool:
    """True if ``text`` is a decimal or scientific numeric literal."""
    return bool(NUMERIC_LITERAL.match(text.strip()))


def _finite_float(value: Union[int, float]) -> Optional[float]:
    """Float reading of a number, or None if it is not finite.

    Integers too wide for a float count as not finite.
    """
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def parse_numeric_literal(text: str) -> Optional[Union[int, float]]:
    """Parse a numeric literal, or return None if ``text`` is not one.

    Integers without a decimal point or exponent stay ``int``. Literals with
    no finite float reading (overflowing exponents, integers beyond the
    float range or the interpreter's digit limit) are not numeric.
    """
    stripped = text.strip()
    if not NUMERIC_LITERAL.match(stripped):
        return None
    if INTEGER_LITERAL.match(stripped):
        try:
            integer = int(stripped)
        except ValueError:
            # Python 3.11+ int/str conversion digit limit
            return None
        return integer if _finite_float(integer) is not None else None
    return _finite_float(float(stripped))


def coerce_cell_text(text: str) -> Scalar:
    """Eager coercion for an extracted text cell.

    Empty cells become None and unambiguous numeric literals become numbers.
    Everything else stays text.
    """
    if text == "" or text.isspace():
        return None
    stripped = text.strip()
    if REDUNDANT_LEADING_ZERO.match(stripped):
        return text
    number = parse_numeric_literal(stripped)
    return text if number is None else number


def is_numeric_value(value: Scalar) -> bool:
    """True for finite numbers and numeric literal strings. Booleans never count."""
    if is_number(value):
        return _finite_float(value) is not None
    if isinstance(value, str):
        return parse_numeric_literal(value) is not None
    return False


def to_number(value: Scalar) -> Optional[float]:
    """Numeric reading of a scalar, or None if it has none."""
    if is_number(value):
        return _finite_float(value)
    if isinstance(value, str):
        number = parse_numeric_literal(value)
        return None if number is None else float(number)
    return None


def is_boolean_value(value: Scalar) -> bool:
    """True for booleans and the strings "true"/"false" in any case."""
    if isinstance(value, bool):
        return True
    if isinstance(value, str):
        return value.strip().lower() in BOOLEAN_LITERALS
    return False


def _parse_iso(text: str) -> bool:
    try:
        date.fromisoformat(text)
        return True
    except ValueError:
        pass
    try:
        datetime.fromisoformat(text)
        return True
    except ValueError:
        return False


def is_date_literal(value: Scalar) -> bool:
    """True if ``value`` is a string naming a calendar date.

    Only strings qualify; numbers and booleans never do, and neither do
    numeric literals such as epoch seconds. The string must state at least
    a year and a month, so bare times ("10:30") and weekday names are
    rejected.
    """
    if not isinstance(value, str):
        return False
    text = value.strip()
    if not text or not any(ch.isdigit() for ch in text):
        return False
    if is_numeric_literal(text):
        return False
    if _parse_iso(text):
        return True

    try:
        parsed_a = date_parser.parse(text, default=_DEFAULT_A)
        parsed_b = date_parser.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return False

    return parsed_a.year == parsed_b.year and parsed_a.month == parsed_b.month
