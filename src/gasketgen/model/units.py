"""Parsing and formatting of human-entered dimensions (decimal or fractional inches)."""
from __future__ import annotations

import math
import re

from gasketgen.model.errors import ParseError

_FRACTION_HYPHEN = re.compile(r"(?<=\d)\s*-\s*(?=\d)")
_MIXED = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_DECIMAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def _divide(numerator: str, denominator: str, raw: str) -> float:
    den = int(denominator)
    if den == 0:
        raise ParseError(f'Invalid fraction "{raw}": denominator is zero.')
    return int(numerator) / den


def parse_dimension(text: str | None) -> float:
    """
    Convert a dimension string into a float.

    Accepted grammars, tried in this order:
        "1 1/2" (mixed fraction, "1-1/2" and "1 - 1/2" are accepted as well)
        "3/4"   (simple fraction)
        "1.25"  (decimal, optional sign and exponent)

    Args:
        text: Raw user text.

    Returns:
        The exact quotient or decimal value, never rounded or clamped.

    Raises:
        ParseError: On empty text, unparsable tokens, a zero denominator or a
            non-finite result.
    """
    raw = "" if text is None else str(text).strip()
    if not raw:
        raise ParseError("Empty value.")

    s = _FRACTION_HYPHEN.sub(" ", raw)
    s = re.sub(r"\s+", " ", s)

    mixed = _MIXED.match(s)
    if mixed:
        return int(mixed.group(1)) + _divide(mixed.group(2), mixed.group(3), raw)

    frac = _FRACTION.match(s)
    if frac:
        return _divide(frac.group(1), frac.group(2), raw)

    if not _DECIMAL.match(s):
        raise ParseError(f'Invalid number "{raw}".')

    value = float(s)
    if not math.isfinite(value):
        raise ParseError(f'Invalid number "{raw}".')
    return value


def format_dimension(value: float, digits: int = 3) -> str:
    """
    Format a value for reports: fixed digits with trailing zeros stripped.

    Returns "—" for NaN or infinity.
    """
    if not math.isfinite(value):
        return "—"
    s = f"{value:.{digits}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s
