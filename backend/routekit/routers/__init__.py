"""
Routing provider adapters.

Every adapter implements ``BaseRouter`` on top of the shared client.
"""
from .base import BaseRouter
from .graphhopper import GraphHopper

__all__ = ["BaseRouter", "GraphHopper"]
