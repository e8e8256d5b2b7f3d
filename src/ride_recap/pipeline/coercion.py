# ============================================
# File: src/ride_recap/pipeline/coercion.py
# Description:
#   Best-effort parsing of the text fields found in the export CSVs
#   (fares, distances, durations, quantities, flags, timestamps).
#
#   Every helper here is total: bad input gives back a neutral value
#   (0, 1, False, NaT) instead of raising, so the aggregation loops
#   never have to branch on parse errors.
# ============================================

from __future__ import annotations

import math
import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

import pandas as pd

# Leading numeric prefix, the same way a lenient float parse reads "12.5 USD"
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^[+-]?\d+")

# "2023-05-01 08:34:56 -0400 EDT" -> drop the zone label, the offset is enough
_ZONE_LABEL = re.compile(r"(?<=[+-]\d{4})\s+[A-Za-z]+$")

TRUTHY_FLAG = "true"

# Hour boundaries, [start, end)
TIME_OF_DAY_BUCKETS = (
    ("morning", 5, 12),
    ("afternoon", 12, 17),
    ("evening", 17, 21),
)
NIGHT_BUCKET = "night"


def _clean(text: object) -> str:
    if text is None:
        return ""
    return str(text).strip()


def parse_amount_or_none(text: object) -> Optional[float]:
    """
    Parse the leading number of a text field.

    Returns None when nothing numeric is found (or the value is NaN/inf).
    """
    match = _NUMBER_PREFIX.match(_clean(text))
    if match is None:
        return None
    value = float(match.group(0))
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_amount(text: object) -> float:
    """Same as parse_amount_or_none() but falls back to 0.0."""
    value = parse_amount_or_none(text)
    return value if value is not None else 0.0


def to_fixed(value: float, digits: int = 2) -> str:
    """
    Format with a fixed number of decimals, exact ties rounded up
    (0.25 -> "0.3"), the way the front-end expects.
    """
    step = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))


def parse_int_or_none(text: object) -> Optional[int]:
    match = _INT_PREFIX.match(_clean(text))
    if match is None:
        return None
    return int(match.group(0))


def parse_quantity(text: object) -> int:
    """Item quantity, 1 when missing or not an integer."""
    value = parse_int_or_none(text)
    return value if value is not None else 1


def is_truthy(flag: object) -> bool:
    if flag is True:
        return True
    return _clean(flag) == TRUTHY_FLAG


def first_present(record: Mapping[str, str], *fields: str) -> str:
    """Return the first non-empty value among `fields`, or ""."""
    for field in fields:
        value = _clean(record.get(field))
        if value:
            return value
    return ""


def parse_timestamp(text: object) -> pd.Timestamp:
    """
    Parse an export timestamp into a naive local-time pd.Timestamp.

    Offsets are honoured and converted to the machine's local zone;
    values without an offset are taken as already local. Anything that
    is not a real date/time gives back pd.NaT.
    """
    raw = _ZONE_LABEL.sub("", _clean(text))
    if not raw:
        return pd.NaT

    try:
        ts = pd.to_datetime(raw, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return pd.NaT

    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return pd.NaT

    if ts.tzinfo is not None:
        try:
            local = ts.to_pydatetime().astimezone()
        except (ValueError, OverflowError, OSError):
            return pd.NaT
        ts = pd.Timestamp(local.replace(tzinfo=None))
    return ts


def is_valid(ts: object) -> bool:
    return isinstance(ts, (pd.Timestamp, datetime)) and not pd.isna(ts)


def time_of_day(hour: int) -> str:
    for name, start, end in TIME_OF_DAY_BUCKETS:
        if start <= hour < end:
            return name
    return NIGHT_BUCKET


def weekday_slot(ts: pd.Timestamp) -> int:
    """Day-of-week index with 0 = Sunday .. 6 = Saturday."""
    # pandas counts Monday as 0
    return (ts.dayofweek + 1) % 7


def empty_time_of_day_counts() -> dict[str, int]:
    counts = {name: 0 for name, _, _ in TIME_OF_DAY_BUCKETS}
    counts[NIGHT_BUCKET] = 0
    return counts
