"""Tests for restaurant/activity selection and plan assembly."""

import random

import pytest

from backend.app.models.common import SearchMode
from backend.app.models.place import BuildPlanParams, PinnedPlanParams, Place
from backend.app.planning.planner import (
    build_pinned_plan,
    build_plan,
    build_plan_from_indices,
    rank_restaurants,
    select_activity,
    select_restaurant,
)
from backend.app.utils.geo import haversine_miles

ORIGIN = (40.7128, -74.0060)


def make_place(
    place_id: str,
    rating: float = 4.0,
    total_ratings: int = 100,
    lat: float = ORIGIN[0],
    lng: float = ORIGIN[1],
) -> Place:
    """Helper to create a candidate venue."""
    return Place(
        id=place_id,
        name=f"Place {place_id}",
        rating=rating,
        total_ratings=total_ratings,
        lat=lat,
        lng=lng,
    )


class TestRestaurantSelection:
    """Rating with 0.2 tolerance, then review count."""

    def test_close_ratings_prefer_more_reviews(self) -> None:
        """4.5 with 10 reviews loses to 4.4 with 50 reviews."""
        a = make_place("A", rating=4.5, total_ratings=10)
        b = make_place("B", rating=4.4, total_ratings=50)

        assert select_restaurant([a, b]) == b
        assert select_restaurant([b, a]) == b

    def test_clear_rating_gap_wins(self) -> None:
        """A gap above 0.2 ignores review counts."""
        a = make_place("A", rating=4.8, total_ratings=5)
        b = make_place("B", rating=4.3, total_ratings=5000)

        assert select_restaurant([b, a]) == a

    def test_rank_orders_best_first(self) -> None:
        """Ranking is best first across all candidates."""
        low = make_place("low", rating=3.0, total_ratings=900)
        high = make_place("high", rating=4.9, total_ratings=20)
        mid = make_place("mid", rating=4.0, total_ratings=300)

        ranked = rank_restaurants([low, mid, high])

        assert [p.id for p in ranked] == ["high", "mid", "low"]

    def test_empty_list_returns_none(self) -> None:
        """No candidates -> None."""
        assert select_restaurant([]) is None


class TestActivitySelection:
    """Nearest activity strictly inside the radius."""

    def test_picks_nearest_in_radius(self) -> None:
        """Closest candidate wins."""
        far = make_place("far", lat=40.80, lng=-74.0060)
        near = make_place("near", lat=40.72, lng=-74.0060)

        assert select_activity(*ORIGIN, 20.0, [far, near]) == near

    def test_radius_is_strict(self) -> None:
        """A candidate exactly at the radius is excluded."""
        candidate = make_place("edge", lat=40.75, lng=-74.0060)
        exact = haversine_miles(*ORIGIN, candidate.lat, candidate.lng)

        assert select_activity(*ORIGIN, exact, [candidate]) is None
        assert select_activity(*ORIGIN, exact + 0.001, [candidate]) == candidate

    def test_zero_radius_returns_none(self) -> None:
        """Even a candidate at the origin is not strictly inside radius 0."""
        at_origin = make_place("origin")

        assert select_activity(*ORIGIN, 0.0, [at_origin]) is None

    def test_ties_keep_first_seen(self) -> None:
        """Equal distances keep the earlier candidate."""
        first = make_place("first", lat=40.72, lng=-74.0060)
        second = make_place("second", lat=40.72, lng=-74.0060)

        assert select_activity(*ORIGIN, 10.0, [first, second]) == first

    def test_selected_activity_always_inside_radius(self) -> None:
        """For random radii and candidates, any pick is strictly inside the radius."""
        rng = random.Random(7)

        for _ in range(100):
            radius = rng.uniform(0, 30)
            activities = [
                make_place(
                    str(i),
                    lat=ORIGIN[0] + rng.uniform(-0.5, 0.5),
                    lng=ORIGIN[1] + rng.uniform(-0.5, 0.5),
                )
                for i in range(rng.randint(0, 8))
            ]

            chosen = select_activity(*ORIGIN, radius, activities)

            if chosen is not None:
                assert haversine_miles(*ORIGIN, chosen.lat, chosen.lng) < radius
            else:
                assert all(
                    haversine_miles(*ORIGIN, a.lat, a.lng) >= radius for a in activities
                )


class TestBuildPlan:
    """Plan assembly and distances."""

    def test_build_plan_fills_both_sides(self) -> None:
        """Restaurant and activity are chosen and distances computed."""
        restaurant = make_place("r", rating=4.6, lat=40.73, lng=-74.00)
        activity = make_place("a", lat=40.71, lng=-74.01)
        params = BuildPlanParams(
            lat=ORIGIN[0],
            lng=ORIGIN[1],
            radius=10,
            restaurants=[restaurant],
            activities=[activity],
        )

        result = build_plan(params)

        assert result.restaurant == restaurant
        assert result.activity == activity
        assert result.distances.to_restaurant == pytest.approx(
            haversine_miles(*ORIGIN, restaurant.lat, restaurant.lng)
        )
        assert result.distances.to_activity == pytest.approx(
            haversine_miles(*ORIGIN, activity.lat, activity.lng)
        )
        assert result.distances.between_places == pytest.approx(
            haversine_miles(restaurant.lat, restaurant.lng, activity.lat, activity.lng)
        )

    def test_missing_side_zeroes_distances(self) -> None:
        """No activity in radius -> activity distances are 0."""
        params = BuildPlanParams(
            lat=ORIGIN[0],
            lng=ORIGIN[1],
            radius=1,
            restaurants=[make_place("r", lat=40.73, lng=-74.00)],
            activities=[make_place("far", lat=41.5, lng=-74.0)],
        )

        result = build_plan(params)

        assert result.activity is None
        assert result.distances.to_activity == 0.0
        assert result.distances.between_places == 0.0
        assert result.distances.to_restaurant > 0

    def test_restaurant_only_mode_skips_activity(self) -> None:
        """Search mode restaurant_only leaves the activity empty."""
        params = BuildPlanParams(
            lat=ORIGIN[0],
            lng=ORIGIN[1],
            radius=10,
            restaurants=[make_place("r")],
            activities=[make_place("a")],
            search_mode=SearchMode.restaurant_only,
        )

        result = build_plan(params)

        assert result.restaurant is not None
        assert result.activity is None

    def test_activity_only_mode_skips_restaurant(self) -> None:
        """Search mode activity_only leaves the restaurant empty."""
        params = BuildPlanParams(
            lat=ORIGIN[0],
            lng=ORIGIN[1],
            radius=10,
            restaurants=[make_place("r")],
            activities=[make_place("a", lat=40.72)],
            search_mode=SearchMode.activity_only,
        )

        result = build_plan(params)

        assert result.restaurant is None
        assert result.activity is not None


class TestBuildFromIndices:
    """Pinned pairs (swap)."""

    @pytest.fixture
    def params(self) -> BuildPlanParams:
        """Two restaurants, two activities."""
        return BuildPlanParams(
            lat=ORIGIN[0],
            lng=ORIGIN[1],
            radius=10,
            restaurants=[make_place("r0", lat=40.73), make_place("r1", lat=40.74)],
            activities=[make_place("a0", lat=40.70), make_place("a1", lat=40.69)],
        )

    def test_pins_requested_pair(self, params: BuildPlanParams) -> None:
        """Indices select exactly that pair, ignoring ranking and radius."""
        result = build_plan_from_indices(params, 1, 1)

        assert result.restaurant is not None and result.restaurant.id == "r1"
        assert result.activity is not None and result.activity.id == "a1"
        assert result.distances.between_places == pytest.approx(
            haversine_miles(40.74, ORIGIN[1], 40.69, ORIGIN[1])
        )

    def test_out_of_range_resolves_to_none(self, params: BuildPlanParams) -> None:
        """Out-of-range and negative indices give None instead of raising."""
        result = build_plan_from_indices(params, 5, -1)

        assert result.restaurant is None
        assert result.activity is None
        assert result.distances.to_restaurant == 0.0
        assert result.distances.to_activity == 0.0

    def test_pinned_params_carry_indices(self, params: BuildPlanParams) -> None:
        """The request-shaped variant uses its own indices."""
        pinned = PinnedPlanParams(
            **params.model_dump(), restaurant_index=0, activity_index=1
        )

        result = build_pinned_plan(pinned)

        assert result.restaurant is not None and result.restaurant.id == "r0"
        assert result.activity is not None and result.activity.id == "a1"
