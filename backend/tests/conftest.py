"""
Pytest configuration and fixtures.
"""
import json

import httpx
import pytest

from routekit.core.client import RoutingRequest


# Encodes (38.5, -120.2), (40.7, -120.95), (43.252, -126.453)
ENCODED_POINTS = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


class FakeTransport:
    """Records requests and replays canned responses or errors."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests: list[RoutingRequest] = []

    async def request(self, request: RoutingRequest):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> RoutingRequest:
        return self.requests[-1]


def make_status_error(status_code: int, body=None, method: str = "POST") -> httpx.HTTPStatusError:
    """Build the error httpx raises for a non-2xx response."""
    request = httpx.Request(method, "https://graphhopper.com/api/1/route")
    if isinstance(body, (dict, list)):
        response = httpx.Response(status_code, json=body, request=request)
    else:
        response = httpx.Response(status_code, content=body or b"", request=request)
    return httpx.HTTPStatusError(
        f"Client error '{status_code}'", request=request, response=response
    )


@pytest.fixture
def encoded_points():
    """Precision-5 polyline of three points."""
    return ENCODED_POINTS


@pytest.fixture
def status_error():
    """Factory for httpx.HTTPStatusError instances."""
    return make_status_error


@pytest.fixture
def fake_transport():
    """Factory for fake transports."""
    return FakeTransport


@pytest.fixture
def recording_handler():
    """httpx.MockTransport handler that records requests and answers JSON."""

    class Handler:
        def __init__(self):
            self.requests: list[httpx.Request] = []
            self.responses: list[tuple[int, dict]] = []

        def queue(self, status_code: int = 200, body=None):
            self.responses.append((status_code, body or {}))

        def __call__(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            # The last queued response repeats
            if len(self.responses) > 1:
                status_code, body = self.responses.pop(0)
            else:
                status_code, body = self.responses[0]
            return httpx.Response(status_code, json=body)

        def body(self, index: int = -1):
            return json.loads(self.requests[index].content)

    return Handler()


@pytest.fixture
def sample_coordinates():
    """Sample Heidelberg coordinates as (lat, lon)."""
    return [
        (49.41461, 8.681495),
        (49.41943, 8.686507),
        (49.420318, 8.687872),
    ]


@pytest.fixture
def route_response_encoded():
    """GraphHopper /route response with an encoded path."""
    return {
        "paths": [
            {
                "distance": 1859.7,
                "time": 310000,
                "points_encoded": True,
                "points": ENCODED_POINTS,
                "bbox": [-126.453, 38.5, -120.2, 43.252],
            }
        ],
        "info": {"copyrights": ["GraphHopper", "OpenStreetMap contributors"]},
    }


@pytest.fixture
def route_response_geojson():
    """GraphHopper /route response with GeoJSON paths and an alternative."""
    return {
        "paths": [
            {
                "distance": 1200.0,
                "time": 200000,
                "points_encoded": False,
                "points": {
                    "type": "LineString",
                    "coordinates": [[8.681495, 49.41461], [8.686507, 49.41943]],
                },
            },
            {
                "distance": 1400.0,
                "time": 240000,
                "points_encoded": False,
                "points": {
                    "type": "LineString",
                    "coordinates": [[8.681495, 49.41461], [8.687872, 49.420318]],
                },
            },
        ],
    }


@pytest.fixture
def isochrone_response():
    """GraphHopper /isochrone response with two buckets."""
    return {
        "polygons": [
            {
                "type": "Feature",
                "properties": {"bucket": 0},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[8.68, 49.41], [8.69, 49.41], [8.69, 49.42], [8.68, 49.41]]],
                },
            },
            {
                "type": "Feature",
                "properties": {"bucket": 1},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[8.67, 49.40], [8.70, 49.40], [8.70, 49.43], [8.67, 49.40]]],
                },
            },
        ],
        "copyrights": ["GraphHopper", "OpenStreetMap contributors"],
    }


@pytest.fixture
def matrix_response():
    """GraphHopper /matrix response with times and distances."""
    return {
        "times": [[0, 97, 52], [89, 0, 70], [54, 71, 0]],
        "distances": [[0, 1098, 626], [1077, 0, 846], [631, 856, 0]],
        "info": {"copyrights": ["GraphHopper", "OpenStreetMap contributors"]},
    }
