# ============================================
# File: src/ride_recap/pipeline/recap.py
# Description:
#   Pure entry point of the aggregation engine: decoded CSV rows in,
#   the nested {profile, years} structure out. No file access here.
# ============================================

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Sequence

from .analyze_orders import analyze_orders
from .analyze_trips import analyze_trips
from .profile import get_profile_info
from .summary import assemble_years


def build_recap(
    trips: Iterable[Mapping[str, str]],
    orders: Iterable[Mapping[str, str]],
    profile_rows: Sequence[Mapping[str, str]] = (),
    rating_rows: Sequence[Mapping[str, str]] = (),
) -> Dict[str, Any]:
    trip_summaries = analyze_trips(trips)
    order_summaries = analyze_orders(orders)

    return {
        "profile": get_profile_info(profile_rows, rating_rows),
        "years": assemble_years(trip_summaries, order_summaries),
    }
