"""Route assembly helpers."""

from .assembler import assemble_route, complete_route, list_routes, start_route
from .links import google_maps_link, waze_link

__all__ = [
    "assemble_route",
    "start_route",
    "complete_route",
    "list_routes",
    "google_maps_link",
    "waze_link",
]
