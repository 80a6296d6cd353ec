from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Iterable, Tuple

import numpy as np
import pandas as pd

from .geodesics import crow_distance_meters, get_line_angle_degrees

COORDINATE_PRECISION = 7


def _parse_degrees(text: str, limit: float) -> str:
    """Validate decimal degree text and return it stripped."""
    if not isinstance(text, str):
        raise ValueError(f"coordinate must be given as text, got {text!r}")
    text = text.strip()
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"not a decimal number: {text!r}")
    if not np.isfinite(value) or abs(value) > limit:
        raise ValueError(f"coordinate out of range: {text!r}")
    return text


@dataclass(frozen=True)
class Coordinate:
    """Geographic point identified by its latitude and longitude text.

    Equality and hashing use the exact text, so ``"34.0"`` and ``"34.00"``
    are different coordinates even though they denote the same place.
    """

    latitude_text: str
    longitude_text: str

    @classmethod
    def parse(cls, latitude_text: str = None, longitude_text: str = None):
        """Construct from text, rejecting non-numeric or out-of-range values."""
        return cls(
            latitude_text=_parse_degrees(latitude_text, 90.0),
            longitude_text=_parse_degrees(longitude_text, 180.0),
        )

    @classmethod
    def from_degrees(
        cls, lat: float = None, lon: float = None, precision: int = COORDINATE_PRECISION
    ):
        """Construct from floats, formatted with a fixed number of decimals."""
        return cls(
            latitude_text=f"{lat:.{precision}f}",
            longitude_text=f"{lon:.{precision}f}",
        )

    @property
    def lat(self) -> float:
        return float(self.latitude_text)

    @property
    def lon(self) -> float:
        return float(self.longitude_text)

    def to_dict(self) -> dict[str, str]:
        return {"lat": self.latitude_text, "lon": self.longitude_text}

    @classmethod
    def from_dict(cls, data: dict[str, str]):
        return cls(latitude_text=data["lat"], longitude_text=data["lon"])

    def __str__(self):
        return f"({self.latitude_text}, {self.longitude_text})"


@dataclass(frozen=True)
class Segment:
    """Directed street edge from start to end."""

    start: Coordinate
    end: Coordinate
    street_name: str

    @cached_property
    def length_meters(self) -> float:
        """Great-circle length of the segment in meters."""
        return crow_distance_meters(self.start, self.end)

    @cached_property
    def angle_degrees(self) -> float:
        """Direction of travel, counter-clockwise from east, in [0, 360)."""
        return get_line_angle_degrees(
            lon_start=self.start.lon,
            lat_start=self.start.lat,
            lon_end=self.end.lon,
            lat_end=self.end.lat,
        )

    def reversed(self) -> Segment:
        """Same street travelled in the opposite direction."""
        return Segment(start=self.end, end=self.start, street_name=self.street_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "street_name": self.street_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls(
            start=Coordinate.from_dict(data["start"]),
            end=Coordinate.from_dict(data["end"]),
            street_name=data["street_name"],
        )


@dataclass(frozen=True)
class DeliveryRequest:
    """An item to be dropped off at a location."""

    item: str
    location: Coordinate

    def to_dict(self) -> dict[str, Any]:
        return {"item": self.item, "location": self.location.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls(item=data["item"], location=Coordinate.from_dict(data["location"]))


@dataclass(frozen=True)
class Route:
    """Contiguous sequence of segments.

    An empty route is the path from a coordinate to itself.
    """

    segments: Tuple[Segment, ...] = ()

    def __post_init__(self):
        if not isinstance(self.segments, tuple):
            raise ValueError("Segments need to be a tuple.")
        if not self.is_contiguous:
            raise ValueError("Consecutive segments need to share end and start.")

    def __len__(self):
        """Length is determined by number of segments."""
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __add__(self, other: Route) -> Route:
        """Concatenate route with a route that starts where this one ends."""
        return Route(segments=self.segments + other.segments)

    @classmethod
    def concatenate(cls, routes: Iterable[Route] = None) -> Route:
        """Join routes end to start."""
        return cls(segments=sum((tuple(r.segments) for r in routes), start=()))

    @property
    def is_contiguous(self) -> bool:
        """True if each segment ends where the next one starts."""
        return all(
            s0.end == s1.start for s0, s1 in zip(self.segments[:-1], self.segments[1:])
        )

    @property
    def start(self) -> Coordinate | None:
        return self.segments[0].start if self.segments else None

    @property
    def end(self) -> Coordinate | None:
        return self.segments[-1].end if self.segments else None

    @property
    def coordinates(self) -> Tuple[Coordinate, ...]:
        """All coordinates visited in order."""
        if not self.segments:
            return ()
        return (self.segments[0].start,) + tuple(s.end for s in self.segments)

    @property
    def length_meters(self) -> float:
        """Sum of segment lengths in meters."""
        return float(sum(s.length_meters for s in self.segments))

    @property
    def data_frame(self):
        """Data frame with one row per segment."""
        return pd.DataFrame(
            {
                "street_name": [s.street_name for s in self.segments],
                "lat_start": [s.start.lat for s in self.segments],
                "lon_start": [s.start.lon for s in self.segments],
                "lat_end": [s.end.lat for s in self.segments],
                "lon_end": [s.end.lon for s in self.segments],
                "length_meters": [s.length_meters for s in self.segments],
            }
        )

    def to_dict(self) -> dict[str, Any]:
        """Simple dict representation of the route."""
        return {"segments": [s.to_dict() for s in self.segments]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        """Construct route from dict."""
        return cls(segments=tuple(Segment.from_dict(s) for s in data["segments"]))
