"""Pytest configuration and shared fixtures."""
from pathlib import Path

import pytest

from delivery_routing.core import Coordinate, GeoGraph, StreetRecord

# Project root is two levels up from this file
PROJECT_ROOT = Path(__file__).resolve().parent.parent

GRID_LAT0, GRID_LON0, GRID_STEP = 34.0, -118.0, 0.001


def grid_coordinate(row, col):
    """Grid intersection, rows running north and columns running east."""
    return Coordinate.from_degrees(
        lat=GRID_LAT0 + GRID_STEP * row, lon=GRID_LON0 + GRID_STEP * col
    )


def street_record(name, coordinates):
    """Street record connecting consecutive coordinates."""
    segments = tuple(
        (a.latitude_text, a.longitude_text, b.latitude_text, b.longitude_text)
        for a, b in zip(coordinates[:-1], coordinates[1:])
    )
    return StreetRecord(name=name, segment_count=len(segments), segments=segments)


def write_map_file(path, records):
    """Write records in map data file format."""
    lines = []
    for record in records:
        lines.append(record.name)
        lines.append(str(record.segment_count))
        lines.extend(" ".join(s) for s in record.segments)
    Path(path).write_text("\n".join(lines) + "\n")
    return path


def write_deliveries_file(path, depot, stops):
    """Write depot and (item, coordinate) pairs in deliveries file format."""
    lines = [f"{depot.latitude_text} {depot.longitude_text}"]
    lines.extend(
        f"{c.latitude_text} {c.longitude_text}:{item}" for item, c in stops
    )
    Path(path).write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def line_points():
    """Three collinear coordinates depot, A and B running east."""
    return tuple(grid_coordinate(0, col) for col in range(3))


@pytest.fixture
def line_records(line_points):
    return [street_record("Main St", line_points)]


@pytest.fixture
def line_graph(line_records):
    return GeoGraph.from_records(line_records)


@pytest.fixture
def island_points():
    return (
        Coordinate.from_degrees(lat=35.0, lon=-117.0),
        Coordinate.from_degrees(lat=35.0, lon=-116.999),
    )


@pytest.fixture
def grid_records(island_points):
    """3x3 street grid with one diagonal and one disconnected street."""
    records = [
        street_record(f"Row {row}", [grid_coordinate(row, col) for col in range(3)])
        for row in range(3)
    ]
    records += [
        street_record(f"Col {col}", [grid_coordinate(row, col) for row in range(3)])
        for col in range(3)
    ]
    records.append(
        street_record("Diagonal Ave", [grid_coordinate(0, 0), grid_coordinate(1, 1)])
    )
    records.append(street_record("Island Rd", list(island_points)))
    return records


@pytest.fixture
def grid_graph(grid_records):
    return GeoGraph.from_records(grid_records)


@pytest.fixture
def map_file(tmp_path, grid_records):
    return write_map_file(tmp_path / "mapdata.txt", grid_records)
