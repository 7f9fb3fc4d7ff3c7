"""Plan assembly - pick a restaurant and an activity near the user."""

import logging
from collections.abc import Sequence
from functools import cmp_to_key

from backend.app.models.common import SearchMode
from backend.app.models.place import BuildPlanParams, Distances, PinnedPlanParams, Place, PlanResult
from backend.app.utils.geo import haversine_miles

logger = logging.getLogger(__name__)

# Ratings closer than this are treated as equal and ranked by review count
RATING_TOLERANCE = 0.2


def _compare_restaurants(a: Place, b: Place) -> int:
    """Order by rating desc; near-equal ratings fall back to review count desc."""
    if abs(a.rating - b.rating) <= RATING_TOLERANCE:
        return b.total_ratings - a.total_ratings
    return -1 if a.rating > b.rating else 1


def rank_restaurants(restaurants: Sequence[Place]) -> list[Place]:
    """Sort restaurants best first using the rating-tolerance comparator."""
    return sorted(restaurants, key=cmp_to_key(_compare_restaurants))


def select_restaurant(restaurants: Sequence[Place]) -> Place | None:
    """Top-ranked restaurant, or None when there are no candidates."""
    ranked = rank_restaurants(restaurants)
    return ranked[0] if ranked else None


def select_activity(
    lat: float, lng: float, radius_miles: float, activities: Sequence[Place]
) -> Place | None:
    """Nearest activity strictly inside the radius.

    Ties keep the first candidate seen at the minimum distance.
    """
    best: Place | None = None
    best_distance = float("inf")

    for activity in activities:
        distance = haversine_miles(lat, lng, activity.lat, activity.lng)
        if distance < radius_miles and distance < best_distance:
            best = activity
            best_distance = distance

    return best


def compute_distances(
    lat: float, lng: float, restaurant: Place | None, activity: Place | None
) -> Distances:
    """Origin->restaurant, origin->activity and restaurant->activity miles (0 if missing)."""
    return Distances(
        to_restaurant=(
            haversine_miles(lat, lng, restaurant.lat, restaurant.lng) if restaurant else 0.0
        ),
        to_activity=haversine_miles(lat, lng, activity.lat, activity.lng) if activity else 0.0,
        between_places=(
            haversine_miles(restaurant.lat, restaurant.lng, activity.lat, activity.lng)
            if restaurant and activity
            else 0.0
        ),
    )


def _wants_restaurant(mode: SearchMode) -> bool:
    return mode in (SearchMode.both, SearchMode.restaurant_only)


def _wants_activity(mode: SearchMode) -> bool:
    return mode in (SearchMode.both, SearchMode.activity_only)


def build_plan(params: BuildPlanParams) -> PlanResult:
    """Assemble a plan from candidate lists.

    Args:
        params: Origin, radius (miles), candidates and search mode

    Returns:
        Chosen restaurant and activity (either may be None) with distances
    """
    restaurant = (
        select_restaurant(params.restaurants) if _wants_restaurant(params.search_mode) else None
    )
    activity = (
        select_activity(params.lat, params.lng, params.radius, params.activities)
        if _wants_activity(params.search_mode)
        else None
    )

    logger.debug(
        "Built plan: restaurant=%s activity=%s (from %d restaurants, %d activities)",
        restaurant.id if restaurant else None,
        activity.id if activity else None,
        len(params.restaurants),
        len(params.activities),
    )

    return PlanResult(
        restaurant=restaurant,
        activity=activity,
        distances=compute_distances(params.lat, params.lng, restaurant, activity),
    )


def _at(places: Sequence[Place], index: int) -> Place | None:
    """Element at a non-negative in-range index, else None."""
    if 0 <= index < len(places):
        return places[index]
    return None


def build_plan_from_indices(
    params: BuildPlanParams, restaurant_index: int, activity_index: int
) -> PlanResult:
    """Assemble a plan from an explicit pair, e.g. after a user swap.

    Out-of-range indices resolve to None rather than raising.
    """
    restaurant = (
        _at(params.restaurants, restaurant_index) if _wants_restaurant(params.search_mode) else None
    )
    activity = (
        _at(params.activities, activity_index) if _wants_activity(params.search_mode) else None
    )

    return PlanResult(
        restaurant=restaurant,
        activity=activity,
        distances=compute_distances(params.lat, params.lng, restaurant, activity),
    )


def build_pinned_plan(params: PinnedPlanParams) -> PlanResult:
    """``build_plan_from_indices`` driven by the indices carried on the request."""
    return build_plan_from_indices(params, params.restaurant_index, params.activity_index)
