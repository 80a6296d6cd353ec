from delivery_routing.core import (
    Coordinate,
    GeoGraph,
    MapLoadError,
    Segment,
    StreetRecord,
)

from conftest import grid_coordinate, street_record

import pytest


def test_load_inserts_both_directions(line_points, line_records):
    depot, a, b = line_points
    graph = GeoGraph()
    assert graph.load(line_records)
    assert graph.outgoing(depot) == [Segment(start=depot, end=a, street_name="Main St")]
    assert set(graph.outgoing(a)) == {
        Segment(start=a, end=depot, street_name="Main St"),
        Segment(start=a, end=b, street_name="Main St"),
    }
    assert graph.outgoing(b) == [Segment(start=b, end=a, street_name="Main St")]


def test_graph_sizes(grid_graph):
    # 9 intersections, 2 island coordinates
    assert grid_graph.num_coordinates == 11
    assert len(grid_graph) == 11
    # 12 grid segments, 1 diagonal, 1 island segment, each in both directions
    assert grid_graph.num_segments == 2 * 14
    assert "coordinates=11" in repr(grid_graph)


def test_outgoing_of_unknown_coordinate_is_empty(line_graph):
    unknown = Coordinate.parse("0.0", "0.0")
    assert line_graph.outgoing(unknown) == []
    assert not line_graph.contains(unknown)
    assert unknown not in line_graph


def test_lookup_uses_text_identity(line_graph, line_points):
    depot = line_points[0]
    same_place = Coordinate.parse("34.0", "-118.0")
    assert depot in line_graph
    assert same_place not in line_graph


def test_outgoing_returns_copy(line_graph, line_points):
    line_graph.outgoing(line_points[1]).clear()
    assert len(line_graph.outgoing(line_points[1])) == 2


def test_segments_of_one_street_share_name(grid_graph):
    corner = grid_coordinate(0, 0)
    names = {s.street_name for s in grid_graph.outgoing(corner)}
    assert names == {"Row 0", "Col 0", "Diagonal Ave"}


def test_coordinates_property(line_graph, line_points):
    assert set(line_graph.coordinates) == set(line_points)


def test_load_adds_to_existing_graph(line_graph):
    before = line_graph.num_segments
    extra = street_record(
        "Elm St", [grid_coordinate(0, 2), grid_coordinate(1, 2), grid_coordinate(2, 2)]
    )
    assert line_graph.load([extra])
    assert line_graph.num_segments == before + 4


@pytest.mark.parametrize(
    "bad_record",
    [
        StreetRecord(name="", segment_count=0),
        StreetRecord(name="Elm St", segment_count=2, segments=(("1", "2", "3", "4"),)),
        StreetRecord(name="Elm St", segment_count=-1),
        StreetRecord(name="Elm St", segment_count=1, segments=(("1", "2", "3"),)),
        StreetRecord(name="Elm St", segment_count=1, segments=(("1", "2", "x", "4"),)),
        StreetRecord(name="Elm St", segment_count=1, segments=(("95", "2", "3", "4"),)),
    ],
)
def test_load_rejects_malformed_record_without_partial_graph(line_graph, bad_record):
    before = (line_graph.num_coordinates, line_graph.num_segments)
    good = street_record("Oak St", [grid_coordinate(2, 0), grid_coordinate(2, 1)])
    assert not line_graph.load([good, bad_record])
    assert (line_graph.num_coordinates, line_graph.num_segments) == before
    assert grid_coordinate(2, 0) not in line_graph


def test_from_records_raises(line_records):
    with pytest.raises(MapLoadError):
        GeoGraph.from_records(line_records + [StreetRecord(name="", segment_count=0)])


def test_empty_street_is_accepted():
    graph = GeoGraph.from_records([StreetRecord(name="Nowhere Ln", segment_count=0)])
    assert graph.num_coordinates == 0
