# ============================================
# File: src/ride_recap/pipeline/analyze_orders.py
# Description:
#   Aggregation of the food-delivery history (Eats/user_orders-*.csv).
#
#   The export has ONE ROW PER ITEM: an order with three items shows up
#   three times with the same Request_Time_Local, Restaurant_Name and
#   Order_Price. Orders are therefore deduplicated on
#   (Request_Time_Local + Restaurant_Name) before any spend is added,
#   while item quantities are summed on every row.
# ============================================

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Set

from .coercion import (
    empty_time_of_day_counts,
    is_valid,
    parse_amount,
    parse_quantity,
    parse_timestamp,
    time_of_day,
    to_fixed,
    weekday_slot,
)
from .partition import FormattedBuckets, YearBuckets
from .streaks import max_streak
from .summary import OrderSummary, top_n

# "Joe's Pizza (Downtown)" -> "Joe's Pizza"
_PARENTHESIZED = re.compile(r"\s*\(.*?\)\s*")


@dataclass
class OrderStats:
    # dedup key -> order price, insertion ordered
    unique_orders: Dict[str, float] = field(default_factory=dict)
    total_spent: float = 0.0
    restaurant_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    restaurant_spend: Dict[str, float] = field(default_factory=lambda: defaultdict(float))
    item_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    order_dates: Set[date] = field(default_factory=set)
    day_of_week_counts: List[int] = field(default_factory=lambda: [0] * 7)
    time_of_day_counts: Dict[str, int] = field(default_factory=empty_time_of_day_counts)


def order_key(order: Mapping[str, str]) -> str:
    return (order.get("Request_Time_Local") or "") + (order.get("Restaurant_Name") or "")


def normalize_restaurant(name: str) -> str:
    return _PARENTHESIZED.sub("", name).strip()


def order_year(order: Mapping[str, str]) -> Optional[int]:
    ts = parse_timestamp(order.get("Request_Time_Local"))
    return int(ts.year) if is_valid(ts) else None


def update_order_stats(stats: OrderStats, order: Mapping[str, str]) -> None:
    key = order_key(order)
    if key not in stats.unique_orders:
        price = parse_amount(order.get("Order_Price"))
        stats.unique_orders[key] = price
        stats.total_spent += price

        restaurant = order.get("Restaurant_Name")
        if restaurant:
            name = normalize_restaurant(restaurant)
            stats.restaurant_counts[name] += 1
            stats.restaurant_spend[name] += price

    item = order.get("Item_Name")
    if item:
        stats.item_counts[item] += parse_quantity(order.get("Item_quantity"))

    # Every item row counts here, not just the first row of an order
    ts = parse_timestamp(order.get("Request_Time_Local"))
    if is_valid(ts):
        stats.order_dates.add(ts.date())
        stats.day_of_week_counts[weekday_slot(ts)] += 1
        stats.time_of_day_counts[time_of_day(ts.hour)] += 1


def format_order_stats(stats: OrderStats) -> OrderSummary:
    return OrderSummary(
        total_orders=len(stats.unique_orders),
        total_spent=to_fixed(stats.total_spent),
        top_restaurants=[
            {
                "name": name,
                "count": count,
                "spend": to_fixed(stats.restaurant_spend.get(name, 0.0)),
            }
            for name, count in top_n(stats.restaurant_counts)
        ],
        top_items=[
            {"name": name, "count": count} for name, count in top_n(stats.item_counts)
        ],
        max_streak=max_streak(stats.order_dates),
        day_of_week_counts=list(stats.day_of_week_counts),
        time_of_day_counts=dict(stats.time_of_day_counts),
    )


def analyze_orders(orders: Iterable[Mapping[str, str]]) -> FormattedBuckets[OrderSummary]:
    """
    Fold every order line into per-year and lifetime accumulators.

    Year routing uses Request_Time_Local only; lines without it are
    dropped, lines with an unparseable value only reach the lifetime bucket.
    """
    buckets: YearBuckets[OrderStats] = YearBuckets(OrderStats)

    for order in orders:
        if not order.get("Request_Time_Local"):
            continue
        buckets.route(order, order_year(order), update_order_stats)

    return buckets.format(format_order_stats)
