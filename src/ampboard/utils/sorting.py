"""Natural ordering helpers."""

import re
from collections.abc import Iterable

_DIGITS = re.compile(r"(\d+)")


def natural_key(value: str) -> tuple:
    """Sort key ordering embedded numbers numerically, ignoring case.

    ``item2`` sorts before ``item10`` and ``A`` before ``b``. The raw value
    is the final tie-breaker so the order is total.
    """
    parts = _DIGITS.split(value.casefold())
    key = tuple(
        (0, int(part), "") if part.isdecimal() else (1, 0, part)
        for part in parts
        if part
    )
    return key, value


def natural_sorted(values: Iterable[str]) -> list[str]:
    """Return ``values`` in natural, case-insensitive order."""
    return sorted(values, key=natural_key)
