# ============================================
# File: src/ride_recap/pipeline/partition.py
# Description:
#   Per-year routing of records into accumulators, with a lifetime
#   accumulator updated in parallel for every routed record.
# ============================================

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Mapping, Optional, TypeVar

S = TypeVar("S")
R = TypeVar("R")


@dataclass
class YearBuckets(Generic[S]):
    """
    One accumulator per calendar year plus a lifetime accumulator.

    Year accumulators are created lazily through `factory` the first
    time a record is routed to that year.
    """

    factory: Callable[[], S]
    lifetime: S = field(init=False)
    years: Dict[int, S] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.lifetime = self.factory()

    def bucket(self, year: int) -> S:
        if year not in self.years:
            self.years[year] = self.factory()
        return self.years[year]

    def route(
        self,
        record: Mapping[str, str],
        year: Optional[int],
        update: Callable[[S, Mapping[str, str]], None],
    ) -> None:
        """
        Fold `record` into the lifetime accumulator and, when the year is
        known, into that year's accumulator.
        """
        if year is not None:
            update(self.bucket(year), record)
        update(self.lifetime, record)

    def format(self, formatter: Callable[[S], R]) -> "FormattedBuckets[R]":
        return FormattedBuckets(
            lifetime=formatter(self.lifetime),
            years={year: formatter(stats) for year, stats in self.years.items()},
        )


@dataclass(frozen=True)
class FormattedBuckets(Generic[R]):
    lifetime: R
    years: Dict[int, R]
