"""Street network stored as a directed adjacency structure keyed by coordinate."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Tuple

from .errors import MapLoadError
from .streets import Coordinate, Segment


@dataclass(frozen=True)
class StreetRecord:
    """One street as produced by a map data reader.

    Attributes
    ----------
    name : str
        Street name shared by all its segments.
    segment_count : int
        Declared number of segments.
    segments : tuple of tuple of str
        ``(start_lat, start_lon, end_lat, end_lon)`` decimal text per segment.
    """

    name: str
    segment_count: int
    segments: Tuple[Tuple[str, str, str, str], ...] = field(default_factory=tuple)

    def street_segments(self) -> list[Segment]:
        """Validate the record and return its forward segments.

        Raises
        ------
        ValueError
            If the name, the count or any coordinate is malformed.
        """
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("street name must be a non-empty string")
        if isinstance(self.segment_count, bool) or not isinstance(
            self.segment_count, int
        ):
            raise ValueError(f"bad segment count {self.segment_count!r}")
        if self.segment_count < 0 or self.segment_count != len(self.segments):
            raise ValueError(
                f"declared {self.segment_count} segments, got {len(self.segments)}"
            )
        street_segments = []
        for coords in self.segments:
            if len(coords) != 4:
                raise ValueError(f"expected four coordinate values, got {coords!r}")
            start_lat, start_lon, end_lat, end_lon = coords
            street_segments.append(
                Segment(
                    start=Coordinate.parse(start_lat, start_lon),
                    end=Coordinate.parse(end_lat, end_lon),
                    street_name=self.name,
                )
            )
        return street_segments


class GeoGraph:
    """Directed street graph.

    Loading a street inserts both directions of every segment, each indexed
    by its start coordinate. The graph is not modified after a successful
    load other than by further loads.
    """

    def __init__(self):
        self._outgoing: dict[Coordinate, list[Segment]] = {}

    @classmethod
    def from_records(cls, records: Iterable[StreetRecord] = None) -> GeoGraph:
        """Build a graph or raise MapLoadError."""
        graph = cls()
        graph._load_or_raise(records)
        return graph

    def load(self, records: Iterable[StreetRecord] = None) -> bool:
        """Add streets to the graph.

        Either every record is added or, if any record is malformed, none is.

        Returns
        -------
        bool
            True on success, False if any record was rejected.
        """
        try:
            self._load_or_raise(records)
        except MapLoadError as err:
            logging.warning("map data rejected: %s", err)
            return False
        return True

    def _load_or_raise(self, records):
        pending: dict[Coordinate, list[Segment]] = {}
        for number, record in enumerate(records):
            try:
                forward = record.street_segments()
            except (ValueError, AttributeError, TypeError) as err:
                raise MapLoadError(f"street record {number}: {err}") from err
            for segment in forward:
                pending.setdefault(segment.start, []).append(segment)
                pending.setdefault(segment.end, []).append(segment.reversed())
        for coordinate, segments in pending.items():
            self._outgoing.setdefault(coordinate, []).extend(segments)
        logging.info(
            "street graph holds %d coordinates and %d segments",
            self.num_coordinates,
            self.num_segments,
        )

    def outgoing(self, coordinate: Coordinate = None) -> list[Segment]:
        """Segments starting at coordinate, empty if there are none."""
        return list(self._outgoing.get(coordinate, ()))

    def contains(self, coordinate: Coordinate = None) -> bool:
        """True if the coordinate has an entry in the graph."""
        return coordinate in self._outgoing

    def __contains__(self, coordinate):
        return self.contains(coordinate)

    def __len__(self):
        return self.num_coordinates

    @property
    def coordinates(self) -> Tuple[Coordinate, ...]:
        return tuple(self._outgoing)

    @property
    def num_coordinates(self) -> int:
        return len(self._outgoing)

    @property
    def num_segments(self) -> int:
        return sum(len(segments) for segments in self._outgoing.values())

    def __repr__(self):
        return (
            f"GeoGraph(coordinates={self.num_coordinates}, "
            f"segments={self.num_segments})"
        )
