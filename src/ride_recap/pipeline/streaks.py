from __future__ import annotations

from datetime import date
from typing import Iterable


def max_streak(dates: Iterable[date]) -> int:
    """
    Length of the longest run of consecutive calendar days in `dates`.

    Duplicates are ignored; an empty input gives 0.
    """
    ordered = sorted(set(dates))
    if not ordered:
        return 0

    best = 1
    current = 1
    for prev, curr in zip(ordered, ordered[1:]):
        if (curr - prev).days == 1:
            current += 1
            best = max(best, current)
        else:
            current = 1
    return best
