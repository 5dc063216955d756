"""
GraphHopper request parameters.

Option models mirror the provider's documented request fields; dotted
provider names (``round_trip.seed``) are exposed as aliases so they can be
passed either way. The ``build_*`` functions turn adapter-level inputs into
the provider's wire format and have no dependency on adapter state.

See https://docs.graphhopper.com for the full field reference.
"""

from enum import Enum
from typing import Any, Literal, Mapping, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from routekit.core.exceptions import ValidationException
from routekit.core.models import WaypointLike, as_lat_lon, as_lon_lat


class GraphHopperProfile(str, Enum):
    """Transport profiles offered by the public GraphHopper API."""

    CAR = "car"
    CAR_DELIVERY = "car_delivery"
    CAR_AVOID_FERRY = "car_avoid_ferry"
    CAR_AVOID_MOTORWAY = "car_avoid_motorway"
    CAR_AVOID_TOLL = "car_avoid_toll"
    SMALL_TRUCK = "small_truck"
    SMALL_TRUCK_DELIVERY = "small_truck_delivery"
    TRUCK = "truck"
    SCOOTER = "scooter"
    SCOOTER_DELIVERY = "scooter_delivery"
    FOOT = "foot"
    HIKE = "hike"
    BIKE = "bike"
    MTB = "mtb"
    RACINGBIKE = "racingbike"


class _Options(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_params(self) -> dict:
        """Provider field names, unset fields dropped."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GraphHopperDirectionsOptions(_Options):
    """Options for the ``/route`` endpoint (``points`` and ``profile`` excluded)."""

    point_hints: Optional[list[str]] = None
    snap_preventions: Optional[list[str]] = None
    curbsides: Optional[list[str]] = None
    locale: Optional[str] = None
    elevation: Optional[bool] = None
    details: Optional[list[str]] = None
    optimize: Optional[str] = None
    instructions: Optional[bool] = None
    calc_points: Optional[bool] = None
    debug: Optional[bool] = None
    points_encoded: Optional[bool] = None
    ch_disable: Optional[bool] = Field(None, alias="ch.disable")
    custom_model: Optional[dict] = None
    headings: Optional[list[float]] = None
    heading_penalty: Optional[float] = None
    pass_through: Optional[bool] = None
    algorithm: Optional[Literal["round_trip", "alternative_route"]] = None
    round_trip_distance: Optional[float] = Field(None, alias="round_trip.distance")
    round_trip_seed: Optional[int] = Field(None, alias="round_trip.seed")
    alternative_route_max_paths: Optional[int] = Field(
        None, alias="alternative_route.max_paths"
    )
    alternative_route_max_weight_factor: Optional[float] = Field(
        None, alias="alternative_route.max_weight_factor"
    )
    alternative_route_max_share_factor: Optional[float] = Field(
        None, alias="alternative_route.max_share_factor"
    )


class GraphHopperIsochroneOptions(_Options):
    """Options for the ``/isochrone`` endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    interval_type: Optional[Literal["time", "distance"]] = None
    buckets: Optional[int] = Field(None, ge=1)
    reverse_flow: Optional[bool] = None


class GraphHopperMatrixOptions(_Options):
    """Options for the ``/matrix`` endpoint, plus source/destination subsets."""

    point_hints: Optional[list[str]] = None
    from_point_hints: Optional[list[str]] = None
    to_point_hints: Optional[list[str]] = None
    snap_preventions: Optional[list[str]] = None
    curbsides: Optional[list[str]] = None
    from_curbsides: Optional[list[str]] = None
    to_curbsides: Optional[list[str]] = None
    out_arrays: Optional[list[Literal["weights", "times", "distances"]]] = None
    fail_fast: Optional[bool] = None
    # Indices into the locations list; not sent to the provider
    sources: Optional[list[int]] = None
    destinations: Optional[list[int]] = None


#: Options whose presence makes GraphHopper reject contraction hierarchies.
CH_INCOMPATIBLE_OPTIONS = (
    "custom_model",
    "headings",
    "heading_penalty",
    "pass_through",
    "algorithm",
    "round_trip.distance",
    "round_trip.seed",
    "alternative_route.max_paths",
    "alternative_route.max_share_factor",
    "alternative_route.max_weight_factor",
)

OptionsT = TypeVar("OptionsT", bound=_Options)


def coerce_options(
    options: Union[OptionsT, Mapping[str, Any], None],
    model: type[OptionsT],
) -> OptionsT:
    """Accept either an options model or a plain mapping."""
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    try:
        return model.model_validate(dict(options))
    except ValidationError as e:
        raise ValidationException(
            message=f"Invalid {model.__name__}: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e


def profile_value(profile: Union[GraphHopperProfile, str]) -> str:
    return profile.value if isinstance(profile, Enum) else str(profile)


def format_point(location: WaypointLike) -> str:
    """Format a location as the ``lat,lon`` string used in GET requests."""
    lat, lon = as_lat_lon(location)
    return f"{lat},{lon}"


def _is_set(value: Any) -> bool:
    # 0 is a meaningful heading/penalty; False and empty lists are not
    if value is None or value is False:
        return False
    if isinstance(value, (list, tuple, dict, str)) and len(value) == 0:
        return False
    return True


def needs_ch_disable(params: Mapping[str, Any]) -> bool:
    """Whether any option incompatible with contraction hierarchies is set."""
    return any(_is_set(params.get(name)) for name in CH_INCOMPATIBLE_OPTIONS)


def build_route_params(
    locations: Sequence[WaypointLike],
    profile: Union[GraphHopperProfile, str],
    options: Union[GraphHopperDirectionsOptions, Mapping[str, Any], None] = None,
) -> dict:
    """
    Build the JSON body for ``POST /route``.

    Args:
        locations: Two or more waypoints in lat/lon order
        profile: Transport profile
        options: Additional route options

    Returns:
        Request body with points in lon/lat order
    """
    if len(locations) < 2:
        raise ValidationException(
            message="At least two locations are required for directions",
            details={"locations": len(locations)},
        )

    opts = coerce_options(options, GraphHopperDirectionsOptions).to_params()
    opts.pop("profile", None)
    opts.pop("points", None)

    params = {
        "profile": profile_value(profile),
        "points": [as_lon_lat(location) for location in locations],
        **opts,
    }

    if needs_ch_disable(params):
        params["ch.disable"] = True

    return params


def build_isochrone_params(
    location: WaypointLike,
    profile: Union[GraphHopperProfile, str],
    intervals: Sequence[float],
    options: Union[GraphHopperIsochroneOptions, Mapping[str, Any], None] = None,
) -> dict:
    """
    Build the query parameters for ``GET /isochrone``.

    Only the first interval is used; a list is accepted for interface
    compatibility with other providers. Use ``buckets`` to split it.
    """
    if not intervals:
        raise ValidationException(message="One interval is required for isochrones")

    opts = coerce_options(options, GraphHopperIsochroneOptions)

    params = {
        "point": format_point(location),
        "profile": profile_value(profile),
    }

    interval = str(intervals[0])
    if opts.interval_type == "distance":
        params["distance_limit"] = interval
    else:
        params["time_limit"] = interval

    if opts.buckets is not None:
        params["buckets"] = str(opts.buckets)

    if opts.reverse_flow is not None:
        params["reverse_flow"] = "true" if opts.reverse_flow else "false"

    return params


def _select(locations: Sequence[WaypointLike], indices: Optional[list[int]]) -> list:
    return [
        as_lon_lat(location)
        for i, location in enumerate(locations)
        if indices is None or i in indices
    ]


def build_matrix_params(
    locations: Sequence[WaypointLike],
    profile: Union[GraphHopperProfile, str],
    options: Union[GraphHopperMatrixOptions, Mapping[str, Any], None] = None,
) -> dict:
    """
    Build the JSON body for ``POST /matrix``.

    ``from_points`` and ``to_points`` keep the input order and are filtered
    independently by the ``sources`` and ``destinations`` indices.
    """
    opts = coerce_options(options, GraphHopperMatrixOptions)

    extra = opts.to_params()
    for key in ("sources", "destinations", "profile", "from_points", "to_points"):
        extra.pop(key, None)

    return {
        "profile": profile_value(profile),
        "from_points": _select(locations, opts.sources),
        "to_points": _select(locations, opts.destinations),
        **extra,
    }
