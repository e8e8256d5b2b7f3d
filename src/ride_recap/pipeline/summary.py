# ============================================
# File: src/ride_recap/pipeline/summary.py
# Description:
#   Read-only summaries built from the accumulators, plus the assembler
#   that merges trip and order summaries per year.
#
#   The dict shape produced by to_dict() / assemble_years() is what the
#   web front-end reads from data.js:
#
#     {
#       "Lifetime": {"trips": {...}, "eats": {...}},
#       "2024":     {"trips": {...}, "eats": {...}},
#       ...                                  (most recent year first)
#     }
# ============================================

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple, Union

from .coercion import empty_time_of_day_counts
from .partition import FormattedBuckets

TOP_N = 5
LIFETIME_KEY = "Lifetime"

Coordinate = Tuple[float, float]


def top_n(counts: Mapping[str, float], n: int = TOP_N) -> List[Tuple[str, float]]:
    """
    Highest counts first. sorted() is stable, so equal counts keep the
    order in which their keys were first seen.
    """
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:n]


def _zero_week() -> List[int]:
    return [0] * 7


@dataclass(frozen=True)
class TripSummary:
    total_trips: int = 0
    total_spent: str = "0.00"
    total_miles: str = "0.00"
    top_cities: List[Dict[str, Union[str, int]]] = field(default_factory=list)
    time_of_day_counts: Dict[str, int] = field(default_factory=empty_time_of_day_counts)
    total_duration_hours: str = "0.0"
    ride_types: List[Dict[str, Union[str, int]]] = field(default_factory=list)
    surge_count: int = 0
    avg_surge_multiplier: Union[str, int] = 0
    split_fare_count: int = 0
    multi_dest_count: int = 0
    pickups: List[Coordinate] = field(default_factory=list)
    dropoffs: List[Coordinate] = field(default_factory=list)
    max_streak: int = 0
    day_of_week_counts: List[int] = field(default_factory=_zero_week)

    def to_dict(self) -> dict:
        return {
            "totalTrips": self.total_trips,
            "totalSpent": self.total_spent,
            "totalMiles": self.total_miles,
            "topCities": [dict(c) for c in self.top_cities],
            "timeOfDayCounts": dict(self.time_of_day_counts),
            "totalDurationHours": self.total_duration_hours,
            "rideTypes": [dict(t) for t in self.ride_types],
            "surgeCount": self.surge_count,
            "avgSurgeMultiplier": self.avg_surge_multiplier,
            "splitFareCount": self.split_fare_count,
            "multiDestCount": self.multi_dest_count,
            "heatmapData": {
                "pickup": [[lat, lng] for lat, lng in self.pickups],
                "dropoff": [[lat, lng] for lat, lng in self.dropoffs],
            },
            "maxStreak": self.max_streak,
            "dayOfWeekCounts": list(self.day_of_week_counts),
        }


@dataclass(frozen=True)
class OrderSummary:
    total_orders: int = 0
    total_spent: str = "0.00"
    top_restaurants: List[Dict[str, Union[str, int]]] = field(default_factory=list)
    top_items: List[Dict[str, Union[str, int]]] = field(default_factory=list)
    max_streak: int = 0
    day_of_week_counts: List[int] = field(default_factory=_zero_week)
    time_of_day_counts: Dict[str, int] = field(default_factory=empty_time_of_day_counts)

    def to_dict(self) -> dict:
        return {
            "totalOrders": self.total_orders,
            "totalSpent": self.total_spent,
            "topRestaurants": [dict(r) for r in self.top_restaurants],
            "topItems": [dict(i) for i in self.top_items],
            "maxStreak": self.max_streak,
            "dayOfWeekCounts": list(self.day_of_week_counts),
            "timeOfDayCounts": dict(self.time_of_day_counts),
        }


DEFAULT_TRIP_SUMMARY = TripSummary()
DEFAULT_ORDER_SUMMARY = OrderSummary()


def assemble_years(
    trips: FormattedBuckets[TripSummary],
    orders: FormattedBuckets[OrderSummary],
) -> Dict[str, Dict[str, dict]]:
    """
    Merge trip and order summaries per year.

    "Lifetime" always comes first, then every year seen in either dataset,
    most recent first. A year missing from one dataset gets that side's
    zero-valued default summary.
    """
    years: Dict[str, Dict[str, dict]] = {
        LIFETIME_KEY: {
            "trips": trips.lifetime.to_dict(),
            "eats": orders.lifetime.to_dict(),
        }
    }

    all_years = sorted(set(trips.years) | set(orders.years), reverse=True)
    for year in all_years:
        years[str(year)] = {
            "trips": trips.years.get(year, DEFAULT_TRIP_SUMMARY).to_dict(),
            "eats": orders.years.get(year, DEFAULT_ORDER_SUMMARY).to_dict(),
        }
    return years
