"""Candidate venues and assembled plan shapes."""

from pydantic import Field

from backend.app.models.common import CamelModel, SearchMode


class Place(CamelModel):
    """A candidate venue returned by an external search."""

    id: str
    name: str
    rating: float = Field(0.0, ge=0, le=5)
    total_ratings: int = Field(0, ge=0)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: str = ""
    price_level: str | None = None


class Distances(CamelModel):
    """Pairwise distances of a plan, in miles."""

    to_restaurant: float = 0.0
    to_activity: float = 0.0
    between_places: float = 0.0


class PlanResult(CamelModel):
    """A restaurant + activity pair with distances."""

    restaurant: Place | None
    activity: Place | None
    distances: Distances


class BuildPlanParams(CamelModel):
    """Inputs to plan assembly."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    radius: float = Field(..., ge=0, description="Search radius in miles")
    restaurants: list[Place] = Field(default_factory=list)
    activities: list[Place] = Field(default_factory=list)
    search_mode: SearchMode = SearchMode.both


class PinnedPlanParams(BuildPlanParams):
    """Plan assembly with an explicit restaurant/activity pair."""

    restaurant_index: int = 0
    activity_index: int = 0
