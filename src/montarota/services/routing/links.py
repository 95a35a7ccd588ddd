"""Third-party navigation links for a sequence of delivery addresses."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote

GOOGLE_MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"
WAZE_NAVIGATE_URL = "https://waze.com/ul"

# Characters left untouched by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_address(address: str) -> str:
    return quote(address.strip(), safe=_URI_COMPONENT_SAFE)


def google_maps_link(origin: str, destinations: Sequence[str]) -> str:
    """Multi-stop directions from ``origin`` through every destination in order."""
    if not destinations:
        raise ValueError("At least one destination is required.")
    stops = [encode_address(origin), *(encode_address(item) for item in destinations)]
    return GOOGLE_MAPS_DIRECTIONS_URL + "/".join(stops)


def waze_link(destination: str) -> str:
    """Waze only navigates to a single destination."""
    return f"{WAZE_NAVIGATE_URL}?q={encode_address(destination)}&navigate=yes"
