import itertools

import networkx as nx
import numpy as np
import pytest

from delivery_routing.algorithms import PointToPointRouter, route_point_to_point
from delivery_routing.core import (
    BadCoordinateError,
    Coordinate,
    GeoGraph,
    NoRouteError,
    Route,
)

from conftest import grid_coordinate, street_record


def _as_networkx(graph):
    """Directed networkx graph with segment lengths as weights."""
    nx_graph = nx.DiGraph()
    for coordinate in graph.coordinates:
        nx_graph.add_node(coordinate)
        for segment in graph.outgoing(coordinate):
            nx_graph.add_edge(segment.start, segment.end, weight=segment.length_meters)
    return nx_graph


@pytest.fixture
def jittered_graph():
    """4x4 grid with displaced intersections and some streets missing."""
    rng = np.random.default_rng(1234)
    size = 4
    points = {
        (row, col): Coordinate.from_degrees(
            lat=34.0 + 0.001 * row + rng.uniform(-3e-4, 3e-4),
            lon=-118.0 + 0.001 * col + rng.uniform(-3e-4, 3e-4),
        )
        for row in range(size)
        for col in range(size)
    }
    records = []
    for row, col in itertools.product(range(size), range(size)):
        if col + 1 < size and rng.random() < 0.8:
            records.append(
                street_record(f"Row {row}", [points[row, col], points[row, col + 1]])
            )
        if row + 1 < size and rng.random() < 0.8:
            records.append(
                street_record(f"Col {col}", [points[row, col], points[row + 1, col]])
            )
    return GeoGraph.from_records(records)


def test_route_along_a_line(line_graph, line_points):
    depot, a, b = line_points
    route, distance = route_point_to_point(graph=line_graph, start=depot, end=b)
    assert route.coordinates == (depot, a, b)
    assert np.isclose(distance, route.length_meters)


def test_route_endpoints(grid_graph):
    start, end = grid_coordinate(0, 0), grid_coordinate(2, 2)
    route, _ = route_point_to_point(graph=grid_graph, start=start, end=end)
    assert route.start == start
    assert route.end == end
    assert route.is_contiguous


def test_route_prefers_diagonal(grid_graph):
    route, distance = route_point_to_point(
        graph=grid_graph, start=grid_coordinate(0, 0), end=grid_coordinate(1, 1)
    )
    assert len(route) == 1
    assert route.segments[0].street_name == "Diagonal Ave"


def test_route_to_itself_is_empty(grid_graph):
    start = grid_coordinate(1, 1)
    route, distance = route_point_to_point(graph=grid_graph, start=start, end=start)
    assert route == Route()
    assert distance == 0.0


@pytest.mark.parametrize("graph_fixture", ["grid_graph", "jittered_graph"])
def test_route_is_as_short_as_dijkstra(graph_fixture, request):
    graph = request.getfixturevalue(graph_fixture)
    nx_graph = _as_networkx(graph)
    for start, end in itertools.permutations(graph.coordinates, 2):
        try:
            expected = nx.dijkstra_path_length(nx_graph, start, end, weight="weight")
        except nx.NetworkXNoPath:
            with pytest.raises(NoRouteError):
                route_point_to_point(graph=graph, start=start, end=end)
            continue
        route, distance = route_point_to_point(graph=graph, start=start, end=end)
        assert np.isclose(distance, expected, rtol=1e-9)
        assert np.isclose(route.length_meters, distance)


def test_route_lengths_are_symmetric(jittered_graph):
    for start, end in itertools.combinations(jittered_graph.coordinates, 2):
        try:
            _, forward = route_point_to_point(graph=jittered_graph, start=start, end=end)
        except NoRouteError:
            continue
        _, backward = route_point_to_point(graph=jittered_graph, start=end, end=start)
        assert np.isclose(forward, backward)


def test_no_route_to_disconnected_street(grid_graph, island_points):
    start = grid_coordinate(0, 0)
    with pytest.raises(NoRouteError) as excinfo:
        route_point_to_point(graph=grid_graph, start=start, end=island_points[0])
    assert excinfo.value.start == start
    assert excinfo.value.end == island_points[0]


def test_bad_start_coordinate(grid_graph):
    unknown = Coordinate.parse("10.0", "10.0")
    with pytest.raises(BadCoordinateError) as excinfo:
        route_point_to_point(graph=grid_graph, start=unknown, end=grid_coordinate(0, 0))
    assert excinfo.value.coordinate == unknown


def test_bad_end_coordinate(grid_graph):
    unknown = Coordinate.parse("10.0", "10.0")
    with pytest.raises(BadCoordinateError) as excinfo:
        route_point_to_point(graph=grid_graph, start=grid_coordinate(0, 0), end=unknown)
    assert excinfo.value.coordinate == unknown


def test_bad_coordinate_takes_precedence_over_no_route(grid_graph, island_points):
    """An absent endpoint is reported even if it could not be reached anyway."""
    unknown = Coordinate.parse("10.0", "10.0")
    with pytest.raises(BadCoordinateError):
        route_point_to_point(graph=grid_graph, start=island_points[0], end=unknown)
    with pytest.raises(BadCoordinateError):
        route_point_to_point(graph=grid_graph, start=unknown, end=unknown)


def test_textually_different_endpoint_is_bad(line_graph):
    with pytest.raises(BadCoordinateError):
        route_point_to_point(
            graph=line_graph,
            start=grid_coordinate(0, 0),
            end=Coordinate.parse("34.0", "-117.998"),
        )


def test_router_class(grid_graph):
    router = PointToPointRouter(grid_graph)
    start, end = grid_coordinate(0, 2), grid_coordinate(2, 0)
    assert router.route(start, end) == route_point_to_point(
        graph=grid_graph, start=start, end=end
    )
