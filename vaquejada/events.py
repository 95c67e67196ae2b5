"""Event listing helpers: location parsing and search."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

# "City-UF" at the end of an address, e.g. "Parque X, Caruaru-PE"
CITY_STATE_PATTERN = re.compile(r"([^-]+)-([A-Z]{2})")


@dataclass(frozen=True)
class Location:
    city: str
    state: str


def parse_location(location: str | None) -> Location:
    """Extract city and state from a free-form event location.

    Only the part after the last comma is inspected. When it does not hold a
    "City-UF" pair, the whole location is taken as the city.
    """
    if not location:
        return Location(city="", state="")

    parts = location.split(",")
    if len(parts) >= 2:
        match = CITY_STATE_PATTERN.match(parts[-1].strip())
        if match:
            return Location(city=match.group(1).strip(), state=match.group(2).strip())

    return Location(city=location, state="")


def filter_events(events: Iterable[dict[str, Any]], term: str) -> list[dict[str, Any]]:
    """Keep events whose name, city or state contains term (case-insensitive)."""
    needle = term.lower()
    matches = []
    for event in events:
        location = parse_location(event.get("location"))
        haystacks = (event.get("name", ""), location.city, location.state)
        if any(needle in h.lower() for h in haystacks):
            matches.append(event)
    return matches
