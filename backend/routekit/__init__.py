"""
routekit - async client adapters for routing web services.

Architecture::

    core/      Settings, logging, exceptions, shared HTTP client, result models
    routers/   Provider adapters (GraphHopper) built on the shared client
"""

__version__ = "0.1.0"

from routekit.core.client import Client, RoutingRequest, RoutingTransport
from routekit.core.exceptions import (
    ConfigurationException,
    RoutingAPIError,
    RoutingException,
    ValidationException,
)
from routekit.core.models import (
    Direction,
    Directions,
    Isochrone,
    Isochrones,
    Matrix,
    Waypoint,
)
from routekit.routers import BaseRouter, GraphHopper

__all__ = [
    "BaseRouter",
    "Client",
    "ConfigurationException",
    "Direction",
    "Directions",
    "GraphHopper",
    "Isochrone",
    "Isochrones",
    "Matrix",
    "RoutingAPIError",
    "RoutingException",
    "RoutingRequest",
    "RoutingTransport",
    "ValidationException",
    "Waypoint",
    "__version__",
]
