"""Field resolution for schema-less accounting records.

Campfire responses mix snake_case and camelCase keys and use several
synonyms for the same concept. Each shaper reads a field from an ordered
list of acceptable keys with one of two precedence flavours:

* ``first_present``: the first key holding a non-null value wins, so a
  literal ``0`` or ``""`` is kept.
* ``first_truthy``: the first key holding a truthy value wins, so ``0``,
  ``""`` and ``false`` fall through to the next key.

Which flavour applies is decided per field and must not be unified: the
two differ for genuine zero amounts.
"""

from collections.abc import Mapping
from typing import Any

from campfire_insights.numeric import Number, is_truthy, to_number


def first_present(record: Any, *keys: str, default: Any = None) -> Any:
    """Return the first non-null value among ``keys``, else ``default``."""
    if not isinstance(record, Mapping):
        return default
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


def first_truthy(record: Any, *keys: str, default: Any = None) -> Any:
    """Return the first truthy value among ``keys``, else ``default``."""
    if not isinstance(record, Mapping):
        return default
    for key in keys:
        value = record.get(key)
        if is_truthy(value):
            return value
    return default


def number_field(record: Any, *keys: str, truthy: bool = False) -> Number:
    """Read a numeric field with the given precedence, defaulting to 0."""
    if truthy:
        return to_number(first_truthy(record, *keys, default=0))
    return to_number(first_present(record, *keys, default=0))


def extract_items(payload: Any) -> list[Any]:
    """Return list of records from a list or paged ``{"results": [...]}`` response."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        results = payload.get("results")
        if isinstance(results, list):
            return results
    return []


def require_records(records: Any, name: str) -> list[Any]:
    """Check that a shaper was handed a list of records.

    Raises:
        TypeError: If ``records`` is not a list.
    """
    if not isinstance(records, list):
        raise TypeError(f"{name} expects a list of records, got {type(records).__name__}")
    return records
