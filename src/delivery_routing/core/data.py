from pathlib import Path
from typing import Iterator, Tuple

from .errors import MapLoadError
from .graph import GeoGraph, StreetRecord
from .streets import Coordinate, DeliveryRequest


def _read_lines(data_file: Path = None) -> list[str]:
    try:
        with Path(data_file).open("r", encoding="utf-8") as fh:
            return fh.read().splitlines()
    except OSError as err:
        raise MapLoadError(f"cannot read {data_file}: {err}") from err


def read_street_records(data_file: Path = None) -> Iterator[StreetRecord]:
    """Read street records from a map data file.

    The file consists of repeating blocks: a line with the street name, a
    line with the number of segments and one line per segment holding
    ``start_lat start_lon end_lat end_lon`` separated by whitespace.
    Coordinate values are kept as text.

    Parameters
    ----------
    data_file : Path
        Map data file.

    Yields
    ------
    StreetRecord
        One record per street block.

    Raises
    ------
    MapLoadError
        If the file cannot be read or a block is malformed.
    """
    lines = _read_lines(data_file)
    n = 0
    while n < len(lines):
        if not lines[n].strip():
            n += 1
            continue
        name = lines[n].strip()
        if n + 1 >= len(lines):
            raise MapLoadError(f"{data_file}:{n + 1}: street {name!r} has no count")
        try:
            segment_count = int(lines[n + 1].strip())
        except ValueError:
            raise MapLoadError(
                f"{data_file}:{n + 2}: bad segment count {lines[n + 1]!r}"
            )
        if segment_count < 0:
            raise MapLoadError(f"{data_file}:{n + 2}: negative segment count")
        segment_lines = lines[n + 2 : n + 2 + segment_count]
        if len(segment_lines) < segment_count:
            raise MapLoadError(f"{data_file}: street {name!r} is truncated")
        segments = []
        for offset, line in enumerate(segment_lines):
            values = line.split()
            if len(values) != 4:
                raise MapLoadError(
                    f"{data_file}:{n + 3 + offset}: expected four coordinates"
                )
            segments.append(tuple(values))
        yield StreetRecord(
            name=name, segment_count=segment_count, segments=tuple(segments)
        )
        n += 2 + segment_count


def load_street_map(data_file: Path = None) -> GeoGraph:
    """Load a map data file into a street graph.

    Raises
    ------
    MapLoadError
        If the file cannot be read or any record is malformed.
    """
    return GeoGraph.from_records(read_street_records(data_file))


def load_deliveries(
    data_file: Path = None,
) -> Tuple[Coordinate, list[DeliveryRequest]]:
    """Load depot and delivery requests.

    The first non-blank line holds ``depot_lat depot_lon``; every further
    non-blank line holds ``lat lon:item``.

    Returns
    -------
    tuple
        (depot, list of DeliveryRequest)

    Raises
    ------
    MapLoadError
        If the file cannot be read or a line is malformed.
    """
    lines = [(n + 1, l) for n, l in enumerate(_read_lines(data_file)) if l.strip()]
    if not lines:
        raise MapLoadError(f"{data_file}: no depot given")

    def _coordinate(line_number, text):
        values = text.split()
        if len(values) != 2:
            raise MapLoadError(f"{data_file}:{line_number}: expected lat and lon")
        try:
            return Coordinate.parse(*values)
        except ValueError as err:
            raise MapLoadError(f"{data_file}:{line_number}: {err}") from err

    depot = _coordinate(*lines[0])
    requests = []
    for line_number, line in lines[1:]:
        location_text, sep, item = line.partition(":")
        if not sep or not item.strip():
            raise MapLoadError(f"{data_file}:{line_number}: expected 'lat lon:item'")
        requests.append(
            DeliveryRequest(
                item=item.strip(), location=_coordinate(line_number, location_text)
            )
        )
    return depot, requests
