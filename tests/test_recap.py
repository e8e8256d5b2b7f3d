"""
Tests for the summary assembler, profile info and build_recap().
File: tests/test_recap.py
"""

from ride_recap.pipeline import build_recap
from ride_recap.pipeline.profile import get_profile_info
from ride_recap.pipeline.summary import (
    DEFAULT_ORDER_SUMMARY,
    DEFAULT_TRIP_SUMMARY,
    top_n,
)


def trip(utc, fare="10.00"):
    return {
        "status": "completed",
        "request_timestamp_utc": utc,
        "request_timestamp_local": utc,
        "fare_amount": fare,
        "city_name": "Seattle",
        "product_type_name": "UberX",
    }


def order_line(local, price="20.00", restaurant="Pho House"):
    return {
        "Request_Time_Local": local,
        "Restaurant_Name": restaurant,
        "Order_Price": price,
        "Item_Name": "Pho",
        "Item_quantity": "1",
    }


class TestBuildRecap:
    def test_years_missing_one_side_get_defaults(self):
        recap = build_recap(
            [trip("2021-04-01 10:00:00")],
            [order_line("2022-08-01 19:00:00")],
        )
        years = recap["years"]

        assert list(years) == ["Lifetime", "2022", "2021"]
        assert years["2021"]["trips"]["totalTrips"] == 1
        assert years["2021"]["eats"] == DEFAULT_ORDER_SUMMARY.to_dict()
        assert years["2022"]["eats"]["totalOrders"] == 1
        assert years["2022"]["trips"] == DEFAULT_TRIP_SUMMARY.to_dict()

    def test_lifetime_first_then_descending_years(self):
        recap = build_recap(
            [trip("2019-01-01 10:00:00"), trip("2023-01-01 10:00:00"), trip("2021-01-01 10:00:00")],
            [order_line("2020-01-01 12:00:00")],
        )
        assert list(recap["years"]) == ["Lifetime", "2023", "2021", "2020", "2019"]
        lifetime = recap["years"]["Lifetime"]
        assert lifetime["trips"]["totalTrips"] == 3
        assert lifetime["trips"]["totalSpent"] == "30.00"
        assert lifetime["eats"]["totalSpent"] == "20.00"

    def test_empty_export(self):
        recap = build_recap([], [])
        assert recap["profile"] == {"memberSince": "Unknown", "avgRating": 0}
        assert list(recap["years"]) == ["Lifetime"]
        assert recap["years"]["Lifetime"]["trips"] == DEFAULT_TRIP_SUMMARY.to_dict()
        assert recap["years"]["Lifetime"]["eats"] == DEFAULT_ORDER_SUMMARY.to_dict()

    def test_output_shape(self):
        recap = build_recap(
            [trip("2024-01-01 10:00:00")],
            [order_line("2024-01-01 19:00:00")],
        )
        trips = recap["years"]["2024"]["trips"]
        eats = recap["years"]["2024"]["eats"]

        assert set(trips) == {
            "totalTrips",
            "totalSpent",
            "totalMiles",
            "topCities",
            "timeOfDayCounts",
            "totalDurationHours",
            "rideTypes",
            "surgeCount",
            "avgSurgeMultiplier",
            "splitFareCount",
            "multiDestCount",
            "heatmapData",
            "maxStreak",
            "dayOfWeekCounts",
        }
        assert set(eats) == {
            "totalOrders",
            "totalSpent",
            "topRestaurants",
            "topItems",
            "maxStreak",
            "dayOfWeekCounts",
            "timeOfDayCounts",
        }
        assert trips["topCities"] == [{"city": "Seattle", "count": 1}]
        assert eats["topRestaurants"] == [{"name": "Pho House", "count": 1, "spend": "20.00"}]


def test_default_summaries():
    trips = DEFAULT_TRIP_SUMMARY.to_dict()
    assert trips["totalSpent"] == "0.00"
    assert trips["totalDurationHours"] == "0.0"
    assert trips["avgSurgeMultiplier"] == 0
    assert trips["heatmapData"] == {"pickup": [], "dropoff": []}
    assert trips["dayOfWeekCounts"] == [0] * 7
    assert DEFAULT_ORDER_SUMMARY.to_dict()["timeOfDayCounts"] == {
        "morning": 0,
        "afternoon": 0,
        "evening": 0,
        "night": 0,
    }


def test_top_n_is_stable_and_capped():
    counts = {"a": 1, "b": 3, "c": 1, "d": 3, "e": 2, "f": 1}
    assert top_n(counts) == [("b", 3), ("d", 3), ("e", 2), ("a", 1), ("c", 1)]
    assert top_n(counts, n=2) == [("b", 3), ("d", 3)]


class TestProfileInfo:
    def test_member_since_and_rating(self):
        profile = [{"Signup Date": "2016-03-15 10:00:00"}]
        ratings = [
            {"five_star_rating": "5"},
            {"five_star_rating": "4"},
            {"five_star_rating": ""},
            {"five_star_rating": "5"},
        ]
        info = get_profile_info(profile, ratings)
        assert info == {"memberSince": "March 2016", "avgRating": "4.67"}

    def test_missing_data(self):
        assert get_profile_info([], []) == {"memberSince": "Unknown", "avgRating": 0}
        assert get_profile_info([{"Signup Date": ""}], [{"five_star_rating": "n/a"}]) == {
            "memberSince": "Unknown",
            "avgRating": 0,
        }

    def test_profile_is_merged_into_recap(self):
        recap = build_recap(
            [],
            [],
            [{"Signup Date": "2019-11-02 08:00:00"}],
            [{"five_star_rating": "5"}],
        )
        assert recap["profile"] == {"memberSince": "November 2019", "avgRating": "5.00"}
