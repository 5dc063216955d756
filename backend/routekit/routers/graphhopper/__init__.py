"""
GraphHopper adapter.

- parameters.py - option models and request builders
- parsing.py    - response to Directions / Isochrones / Matrix
- router.py     - GraphHopper adapter and error mapping
"""
from .parameters import (
    GraphHopperDirectionsOptions,
    GraphHopperIsochroneOptions,
    GraphHopperMatrixOptions,
    GraphHopperProfile,
)
from .router import GraphHopper, handle_graphhopper_error

__all__ = [
    "GraphHopper",
    "GraphHopperDirectionsOptions",
    "GraphHopperIsochroneOptions",
    "GraphHopperMatrixOptions",
    "GraphHopperProfile",
    "handle_graphhopper_error",
]
