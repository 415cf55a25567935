from __future__ import annotations

import math


def format_number(value: float, precision: int = 4) -> str:
    """Format `value` with at most `precision` significant digits and no trailing zeros.

    >>> format_number(123.456)
    '123.5'
    >>> format_number(2.0)
    '2'
    """

    if precision < 1:
        raise ValueError("precision must be >= 1")
    v = float(value)
    if not math.isfinite(v):
        raise ValueError(f"cannot format non-finite coordinate: {value!r}")
    rounded = float(f"{v:.{precision}g}")
    if rounded == 0.0:
        return "0"
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)
