"""
GraphHopper routing adapter.

Public API: https://graphhopper.com/api/1 (requires an API key).
Self-hosted instances can be used by passing ``base_url`` without a key.

Example:
    from routekit.routers.graphhopper import GraphHopper

    gh = GraphHopper(api_key="...")
    directions = await gh.directions([(49.41, 8.68), (49.42, 8.69)], "car")
"""
import logging
from typing import Any, Mapping, NoReturn, Optional, Sequence, Union
from urllib.parse import urlencode

import httpx

from routekit.core.client import Client, RoutingRequest, RoutingTransport
from routekit.core.config import Settings, settings as default_settings
from routekit.core.exceptions import ConfigurationException, RoutingAPIError
from routekit.core.models import Directions, Isochrones, Matrix, WaypointLike
from routekit.routers.base import BaseRouter
from routekit.routers.graphhopper.parameters import (
    GraphHopperDirectionsOptions,
    GraphHopperIsochroneOptions,
    GraphHopperMatrixOptions,
    GraphHopperProfile,
    build_isochrone_params,
    build_matrix_params,
    build_route_params,
    coerce_options,
)
from routekit.routers.graphhopper.parsing import (
    parse_directions_response,
    parse_isochrone_response,
    parse_matrix_response,
)

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://graphhopper.com/api/1"

Profile = Union[GraphHopperProfile, str]
DirectionsOptions = Union[GraphHopperDirectionsOptions, Mapping[str, Any], None]
IsochroneOptions = Union[GraphHopperIsochroneOptions, Mapping[str, Any], None]
MatrixOptions = Union[GraphHopperMatrixOptions, Mapping[str, Any], None]


def handle_graphhopper_error(error: httpx.HTTPError) -> NoReturn:
    """
    Translate a transport error into ``RoutingAPIError``.

    GraphHopper answers errors with ``{"message": ..., "hints": [...]}``;
    hints default to an empty list when absent or when the body is not JSON.
    """
    status_code = None
    status = None
    data: Any = {}

    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
        status = error.response.reason_phrase
        try:
            data = error.response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

    raise RoutingAPIError(
        message=str(error),
        status_code=status_code,
        status=status,
        error_message=data.get("message"),
        hints=data.get("hints") or [],
    ) from error


class GraphHopper(BaseRouter):
    """
    Client adapter for the GraphHopper Directions API.

    Operations:
    - directions: POST /route
    - reachability: GET /isochrone
    - matrix: POST /matrix

    Each operation has a ``*_dry_run`` twin returning the request description
    instead of sending it. Retries (if enabled) happen in the shared client.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        headers: Optional[dict] = None,
        timeout: Optional[int] = None,
        retry_over_query_limit: Optional[bool] = None,
        max_retries: Optional[int] = None,
        routing_transport: Optional[RoutingTransport] = None,
        **client_kwargs: Any,
    ):
        """
        Args:
            api_key: GraphHopper API key, required for the public service
            base_url: Custom server URL (self-hosted instances)
            user_agent: User-Agent header value
            headers: Extra headers sent with every request
            timeout: Request timeout in milliseconds
            retry_over_query_limit: Retry requests answered with HTTP 429
            max_retries: Maximum retries when retry_over_query_limit is set
            routing_transport: Request capability to use instead of the default Client
            **client_kwargs: Passed through to ``httpx.AsyncClient`` (``transport``,
                ``verify``, ``proxy``, ...)
        """
        if base_url is None and not api_key:
            raise ConfigurationException("Please provide an API key for GraphHopper")
        if routing_transport is not None and not isinstance(routing_transport, RoutingTransport):
            raise ConfigurationException(
                "routing_transport must implement RoutingTransport",
                details={"type": type(routing_transport).__name__},
            )

        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_URL).rstrip("/")
        self.client: RoutingTransport = routing_transport or Client(
            self.base_url,
            user_agent=user_agent,
            timeout=timeout,
            retry_over_query_limit=retry_over_query_limit,
            headers=headers,
            max_retries=max_retries,
            **client_kwargs,
        )

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, **kwargs: Any
    ) -> "GraphHopper":
        """Build an adapter from environment settings; kwargs take precedence."""
        settings = settings or default_settings
        options = {
            "api_key": settings.GRAPHHOPPER_API_KEY,
            "user_agent": settings.ROUTING_USER_AGENT,
            "timeout": settings.ROUTING_TIMEOUT_MS,
            "retry_over_query_limit": settings.ROUTING_RETRY_OVER_QUERY_LIMIT,
            "max_retries": settings.ROUTING_MAX_RETRIES,
        }
        if settings.GRAPHHOPPER_URL != DEFAULT_URL:
            options["base_url"] = settings.GRAPHHOPPER_URL
        options.update(kwargs)
        return cls(**options)

    @property
    def name(self) -> str:
        return "graphhopper"

    def _keyed(self, endpoint: str) -> str:
        if not self.api_key:
            return endpoint
        return f"{endpoint}?{urlencode({'key': self.api_key})}"

    def _describe(self, request: RoutingRequest) -> str:
        if isinstance(self.client, Client):
            return self.client.describe(request)
        return request.describe(self.base_url)

    async def _perform(self, request: RoutingRequest, operation: str) -> Any:
        try:
            return await self.client.request(request)
        except httpx.HTTPError as e:
            logger.warning(
                f"GraphHopper {operation} failed: {e}",
                extra={"provider": self.name, "endpoint": request.endpoint},
            )
            handle_graphhopper_error(e)

    # ------------------------------------------------------------------
    # Directions
    # ------------------------------------------------------------------

    def _route_request(
        self,
        locations: Sequence[WaypointLike],
        profile: Profile,
        options: DirectionsOptions,
    ) -> RoutingRequest:
        return RoutingRequest(
            endpoint=self._keyed("/route"),
            post_params=build_route_params(locations, profile, options),
        )

    async def directions(
        self,
        locations: Sequence[WaypointLike],
        profile: Profile,
        options: DirectionsOptions = None,
    ) -> Directions:
        """
        Get directions between two or more points.

        Args:
            locations: Waypoints as (lat, lon) pairs or Waypoint objects
            profile: One of GraphHopperProfile
            options: Additional /route parameters

        Returns:
            Directions with one entry per path

        Raises:
            RoutingAPIError: The request failed
        """
        request = self._route_request(locations, profile, options)
        response = await self._perform(request, "directions")
        return parse_directions_response(response)

    def directions_dry_run(
        self,
        locations: Sequence[WaypointLike],
        profile: Profile,
        options: DirectionsOptions = None,
    ) -> str:
        """Describe the directions request without sending it."""
        return self._describe(self._route_request(locations, profile, options))

    # ------------------------------------------------------------------
    # Isochrones
    # ------------------------------------------------------------------

    def _isochrone_request(
        self,
        location: WaypointLike,
        profile: Profile,
        intervals: Sequence[float],
        options: GraphHopperIsochroneOptions,
    ) -> RoutingRequest:
        params = build_isochrone_params(location, profile, intervals, options)
        return RoutingRequest(
            endpoint="/isochrone",
            get_params={**params, "key": self.api_key},
        )

    async def reachability(
        self,
        location: WaypointLike,
        profile: Profile,
        intervals: Sequence[float],
        options: IsochroneOptions = None,
    ) -> Isochrones:
        """
        Get isochrones or isodistances around a location.

        Args:
            location: Center as (lat, lon) or Waypoint
            profile: One of GraphHopperProfile
            intervals: Single-element list with the time (s) or distance (m) limit;
                use ``buckets`` to split it into several polygons
            options: interval_type, buckets, reverse_flow

        Returns:
            Isochrones, one per bucket

        Raises:
            RoutingAPIError: The request failed
        """
        opts = coerce_options(options, GraphHopperIsochroneOptions)
        request = self._isochrone_request(location, profile, intervals, opts)
        response = await self._perform(request, "reachability")
        return parse_isochrone_response(response, location, opts.interval_type or "time")

    def reachability_dry_run(
        self,
        location: WaypointLike,
        profile: Profile,
        intervals: Sequence[float],
        options: IsochroneOptions = None,
    ) -> str:
        """Describe the isochrone request without sending it."""
        opts = coerce_options(options, GraphHopperIsochroneOptions)
        return self._describe(self._isochrone_request(location, profile, intervals, opts))

    # ------------------------------------------------------------------
    # Matrix
    # ------------------------------------------------------------------

    def _matrix_request(
        self,
        locations: Sequence[WaypointLike],
        profile: Profile,
        options: MatrixOptions,
    ) -> RoutingRequest:
        return RoutingRequest(
            endpoint=self._keyed("/matrix"),
            post_params=build_matrix_params(locations, profile, options),
        )

    async def matrix(
        self,
        locations: Sequence[WaypointLike],
        profile: Profile,
        options: MatrixOptions = None,
    ) -> Matrix:
        """
        Get a duration/distance matrix.

        Not available on the open source GraphHopper server.

        Args:
            locations: Waypoints as (lat, lon) pairs or Waypoint objects
            profile: One of GraphHopperProfile
            options: Additional /matrix parameters; ``sources`` and
                ``destinations`` select location indices for each side

        Returns:
            Matrix with durations (s) and distances (m)

        Raises:
            RoutingAPIError: The request failed
        """
        request = self._matrix_request(locations, profile, options)
        response = await self._perform(request, "matrix")
        return parse_matrix_response(response)

    def matrix_dry_run(
        self,
        locations: Sequence[WaypointLike],
        profile: Profile,
        options: MatrixOptions = None,
    ) -> str:
        """Describe the matrix request without sending it."""
        return self._describe(self._matrix_request(locations, profile, options))
