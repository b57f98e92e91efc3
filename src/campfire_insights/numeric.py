"""Numeric helpers shared by every shaper: coercion, truthiness and rounding."""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

Number = int | float


def to_number(value: Any) -> Number:
    """Coerce a loosely-typed JSON scalar to a number.

    Missing, empty, non-finite and unparsable values become 0. Booleans
    count as 1/0 and numeric strings are parsed after stripping whitespace.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, Decimal):
        return to_number(float(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            parsed = float(text)
        except ValueError:
            return 0
        return parsed if math.isfinite(parsed) else 0
    return 0


def is_truthy(value: Any) -> bool:
    """Return True when a JSON value counts as present in a truthy chain.

    null, false, zero, NaN and the empty string are falsy. Containers are
    truthy even when empty.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value == value and value != 0
    if isinstance(value, str):
        return value != ""
    return True


TRUE_STRINGS = frozenset({"true", "t", "yes", "y", "1"})
FALSE_STRINGS = frozenset({"false", "f", "no", "n", "0", ""})


def to_flag(value: Any, default: bool = False) -> bool:
    """Read a boolean flag that may arrive as a JSON boolean, number or string.

    Strings are matched case-insensitively against common spellings; an
    unrecognized string or a missing value gives ``default``.
    """
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
        return default
    return is_truthy(value)


def round_amount(n: Number, decimals: int = 2) -> float:
    """Round half away from zero to a fixed number of decimal places.

    Rounding works on the shortest decimal form of ``n`` rather than on its
    binary value scaled by a power of ten, so ``round_amount(1.005)`` gives
    1.01 where ``1.005 * 100`` would land on 100.4999... and round down.
    """
    try:
        quantum = Decimal(1).scaleb(-decimals)
        rounded = Decimal(str(n)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0.0
    # Collapse -0.0 so negative dust never renders as "-0.0"
    return float(rounded) or 0.0


def round_groups(groups: dict[str, dict[str, Any]], *fields: str) -> dict[str, dict[str, Any]]:
    """Round the named running totals of every group in place."""
    for bucket in groups.values():
        for name in fields:
            bucket[name] = round_amount(bucket[name])
    return groups
