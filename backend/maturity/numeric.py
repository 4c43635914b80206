from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional, TypeVar

T = TypeVar("T")

SCORE_MIN = 0.0
SCORE_MAX = 5.0

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_PREFIXED_RE = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_BASES = {"x": 16, "o": 8, "b": 2}
_CENTS = Decimal("0.01")


def first_present(candidates: Iterable[Optional[T]], default: T) -> T:
    """Return the first candidate that is not None, else ``default``."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return default


def is_number(value: Any) -> bool:
    # bool is an int subclass but never counts as a score
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def number_text(value: float) -> str:
    """Shortest round-trip text for a number, with exponents only past 1e21 and below 1e-6."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(float(value)))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    point = exponent + k
    if k <= point <= 21:
        return sign + digits + "0" * (point - k)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits
    e = point - 1
    mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
    return f"{sign}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def js_text(value: Any) -> str:
    """Render ``value`` the way the browser client would stringify it."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int) and abs(value) < 10**21:
        return str(value)
    if is_number(value):
        try:
            return number_text(float(value))
        except OverflowError:
            return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, (list, tuple)):
        # null items print as empty, nested lists flatten
        return ",".join("" if item is None else js_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def _parse_text(text: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return 0.0
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    prefixed = _PREFIXED_RE.fullmatch(text)
    if prefixed:
        try:
            return float(int(prefixed.group(2), _BASES[prefixed.group(1).lower()]))
        except ValueError:
            return None
    return None


def coerce_to_finite_number(value: Any, fallback: float = 0.0) -> float:
    """Permissively turn ``value`` into a finite float.

    None and empty strings count as zero, booleans as 1/0, numeric strings
    (decimal, exponent, 0x/0o/0b literals) are parsed and lists are read
    through their comma-joined text form, so ``[[5]]`` is 5 and ``[1, 2]``
    is not a number. Anything that does not yield a finite number returns
    ``fallback``.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        try:
            number = float(value)
        except OverflowError:
            return fallback
        return number if math.isfinite(number) else fallback
    if isinstance(value, (list, tuple)):
        value = js_text(value)
    if isinstance(value, str):
        number = _parse_text(value)
        if number is None or not math.isfinite(number):
            return fallback
        return number
    return fallback


def clamp(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    return max(low, min(high, value))


def round_score(value: float) -> float:
    # ties round away from zero on the exact binary value, so 2.625 -> 2.63
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))
