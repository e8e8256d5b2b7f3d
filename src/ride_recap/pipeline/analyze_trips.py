# ============================================
# File: src/ride_recap/pipeline/analyze_trips.py
# Description:
#   Aggregation of the rider trip history (Rider/trips_data-*.csv).
#
#   - only "completed" / "fare_split" trips are counted
#   - each trip is routed to the year of its UTC request time
#     (local time as fallback) and always to the lifetime bucket
#   - hour, weekday and streak date come from the LOCAL request time
#     (UTC as fallback)
# ============================================

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .coercion import (
    empty_time_of_day_counts,
    first_present,
    is_truthy,
    is_valid,
    parse_amount,
    parse_amount_or_none,
    parse_timestamp,
    time_of_day,
    to_fixed,
    weekday_slot,
)
from .partition import FormattedBuckets, YearBuckets
from .streaks import max_streak
from .summary import TripSummary, top_n

COMPLETED_STATUSES = {"completed", "fare_split"}

# Priority order: first present and parseable wins
FARE_FIELDS = ("fare_amount", "client_upfront_fare_local", "original_fare_local")

RIDE_TYPE_LABELS = {"uberxl": "UberXL", "uberx": "UberX"}
UNKNOWN_RIDE_TYPE = "Unknown"


@dataclass
class TripStats:
    trip_count: int = 0
    total_spent: float = 0.0
    total_miles: float = 0.0
    total_moving_seconds: float = 0.0
    city_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    ride_types: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    time_of_day_counts: Dict[str, int] = field(default_factory=empty_time_of_day_counts)
    day_of_week_counts: List[int] = field(default_factory=lambda: [0] * 7)
    trip_dates: Set[date] = field(default_factory=set)
    surge_count: int = 0
    surge_multiplier_sum: float = 0.0
    surge_trip_count: int = 0
    split_fare_count: int = 0
    multi_dest_count: int = 0
    pickups: List[Tuple[float, float]] = field(default_factory=list)
    dropoffs: List[Tuple[float, float]] = field(default_factory=list)


def is_completed(trip: Mapping[str, str]) -> bool:
    return trip.get("status") in COMPLETED_STATUSES


def trip_fare(trip: Mapping[str, str]) -> float:
    for name in FARE_FIELDS:
        value = parse_amount_or_none(trip.get(name))
        if value is not None:
            return value
    return 0.0


def normalize_ride_type(name: str) -> str:
    if not name:
        return UNKNOWN_RIDE_TYPE
    return RIDE_TYPE_LABELS.get(name.lower(), name)


def _coordinate(lat_text: object, lng_text: object) -> Optional[Tuple[float, float]]:
    lat = parse_amount_or_none(lat_text)
    lng = parse_amount_or_none(lng_text)
    if lat is None or lng is None or lat == 0 or lng == 0:
        return None
    return lat, lng


def trip_year(trip: Mapping[str, str]) -> Optional[int]:
    """
    Year used for bucketing: UTC request time first, local as fallback.

    Note this is the opposite preference of the hour/weekday logic in
    update_trip_stats().
    """
    ts = parse_timestamp(
        first_present(trip, "request_timestamp_utc", "request_timestamp_local")
    )
    return int(ts.year) if is_valid(ts) else None


def update_trip_stats(stats: TripStats, trip: Mapping[str, str]) -> None:
    stats.trip_count += 1
    stats.total_spent += trip_fare(trip)
    stats.total_miles += parse_amount(trip.get("trip_distance_miles"))
    stats.total_moving_seconds += parse_amount(trip.get("trip_duration_seconds"))

    city = trip.get("city_name")
    if city:
        stats.city_counts[city] += 1

    local = parse_timestamp(
        first_present(trip, "request_timestamp_local", "request_timestamp_utc")
    )
    if is_valid(local):
        stats.time_of_day_counts[time_of_day(local.hour)] += 1
        stats.day_of_week_counts[weekday_slot(local)] += 1
        stats.trip_dates.add(local.date())

    stats.ride_types[normalize_ride_type(trip.get("product_type_name") or "")] += 1

    if is_truthy(trip.get("is_surged")):
        stats.surge_count += 1
    multiplier = parse_amount_or_none(trip.get("surge_multiplier"))
    if multiplier is not None and multiplier > 1:
        stats.surge_multiplier_sum += multiplier
        stats.surge_trip_count += 1

    if is_truthy(trip.get("is_fare_split")):
        stats.split_fare_count += 1
    if is_truthy(trip.get("is_multidestination")):
        stats.multi_dest_count += 1

    pickup = _coordinate(trip.get("begintrip_lat"), trip.get("begintrip_lng"))
    if pickup is not None:
        stats.pickups.append(pickup)
    dropoff = _coordinate(trip.get("dropoff_lat"), trip.get("dropoff_lng"))
    if dropoff is not None:
        stats.dropoffs.append(dropoff)


def format_trip_stats(stats: TripStats) -> TripSummary:
    if stats.surge_trip_count > 0:
        avg_surge: str | int = to_fixed(stats.surge_multiplier_sum / stats.surge_trip_count)
    else:
        avg_surge = 0

    return TripSummary(
        total_trips=stats.trip_count,
        total_spent=to_fixed(stats.total_spent),
        total_miles=to_fixed(stats.total_miles),
        top_cities=[
            {"city": city, "count": count} for city, count in top_n(stats.city_counts)
        ],
        time_of_day_counts=dict(stats.time_of_day_counts),
        total_duration_hours=to_fixed(stats.total_moving_seconds / 3600, 1),
        ride_types=[
            {"type": name, "count": count} for name, count in top_n(stats.ride_types)
        ],
        surge_count=stats.surge_count,
        avg_surge_multiplier=avg_surge,
        split_fare_count=stats.split_fare_count,
        multi_dest_count=stats.multi_dest_count,
        pickups=list(stats.pickups),
        dropoffs=list(stats.dropoffs),
        max_streak=max_streak(stats.trip_dates),
        day_of_week_counts=list(stats.day_of_week_counts),
    )


def analyze_trips(trips: Iterable[Mapping[str, str]]) -> FormattedBuckets[TripSummary]:
    """
    Fold every completed trip into per-year and lifetime accumulators.

    Trips with no request timestamp at all are dropped; trips whose
    timestamp cannot be parsed only reach the lifetime bucket.
    """
    buckets: YearBuckets[TripStats] = YearBuckets(TripStats)

    for trip in trips:
        if not is_completed(trip):
            continue
        if not first_present(trip, "request_timestamp_utc", "request_timestamp_local"):
            continue
        buckets.route(trip, trip_year(trip), update_trip_stats)

    return buckets.format(format_trip_stats)
