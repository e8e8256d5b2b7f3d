from __future__ import annotations

from typing import Dict, Sequence, Mapping, Union

from .coercion import is_valid, parse_int_or_none, parse_timestamp, to_fixed

UNKNOWN_MEMBER_SINCE = "Unknown"


def get_profile_info(
    profile_rows: Sequence[Mapping[str, str]],
    rating_rows: Sequence[Mapping[str, str]],
) -> Dict[str, Union[str, int]]:
    """
    Account metadata shown next to the yearly stats.

    - memberSince: signup month of the first profile row ("March 2016")
    - avgRating:   mean of the integer five_star_rating values (2 decimals),
                   0 when there is no usable rating
    """
    member_since = UNKNOWN_MEMBER_SINCE
    if profile_rows and profile_rows[0].get("Signup Date"):
        signup = parse_timestamp(profile_rows[0]["Signup Date"])
        if is_valid(signup):
            member_since = signup.strftime("%B %Y")

    avg_rating: Union[str, int] = 0
    ratings = [parse_int_or_none(r.get("five_star_rating")) for r in rating_rows]
    ratings = [r for r in ratings if r is not None]
    if ratings:
        avg_rating = to_fixed(sum(ratings) / len(ratings))

    return {"memberSince": member_since, "avgRating": avg_rating}
