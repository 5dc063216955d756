"""
Router interface shared by provider adapters.

Implements the Strategy pattern for swappable routing providers: callers
program against ``BaseRouter`` and pick a concrete adapter at runtime.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from routekit.core.models import Directions, Isochrones, Matrix, WaypointLike


class BaseRouter(ABC):
    """Abstract base class for routing provider adapters."""

    @abstractmethod
    async def directions(
        self,
        locations: Sequence[WaypointLike],
        profile: str,
        options: Optional[Any] = None,
    ) -> Directions:
        """Route between two or more locations."""
        pass

    @abstractmethod
    async def reachability(
        self,
        location: WaypointLike,
        profile: str,
        intervals: Sequence[float],
        options: Optional[Any] = None,
    ) -> Isochrones:
        """Isochrones or isodistances around a location."""
        pass

    @abstractmethod
    async def matrix(
        self,
        locations: Sequence[WaypointLike],
        profile: str,
        options: Optional[Any] = None,
    ) -> Matrix:
        """Duration and distance matrix between locations."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass
