from __future__ import annotations

import heapq
import logging
from typing import Tuple

from ..core.errors import BadCoordinateError, NoRouteError
from ..core.geodesics import crow_distance_meters
from ..core.graph import GeoGraph
from ..core.streets import Coordinate, Route, Segment


def route_point_to_point(
    graph: GeoGraph = None,
    start: Coordinate = None,
    end: Coordinate = None,
) -> Tuple[Route, float]:
    """Find a minimum-distance route with A* search.

    The priority of a candidate coordinate is the distance travelled from
    start plus its great-circle distance to end. Segment lengths and the
    heuristic share the same metric, so the heuristic never overestimates and
    the first time end is taken from the frontier the route is shortest.

    Parameters
    ----------
    graph : GeoGraph
        Street graph to search.
    start : Coordinate
        Where the route begins.
    end : Coordinate
        Where the route ends.

    Returns
    -------
    tuple of (Route, float)
        Route from start to end and its length in meters. The route is
        empty if start equals end.

    Raises
    ------
    BadCoordinateError
        If start or end has no entry in the graph.
    NoRouteError
        If end cannot be reached from start.
    """
    for coordinate in (start, end):
        if not graph.contains(coordinate):
            raise BadCoordinateError(coordinate)

    # frontier entries: (priority, insertion counter, coordinate)
    counter = 0
    frontier = [(0.0, counter, start)]
    best_cost = {start: 0.0}
    # coordinate -> segment used to reach it; None marks the root
    predecessor: dict[Coordinate, Segment | None] = {start: None}
    closed = set()

    while frontier:
        _, _, current = heapq.heappop(frontier)
        if current == end:
            return _reconstruct(predecessor, end)
        if current in closed:
            continue
        closed.add(current)

        for segment in graph.outgoing(current):
            candidate = segment.end
            if candidate in closed:
                continue
            cost = best_cost[current] + segment.length_meters
            if candidate not in best_cost or cost < best_cost[candidate]:
                best_cost[candidate] = cost
                predecessor[candidate] = segment
                counter += 1
                heapq.heappush(
                    frontier,
                    (cost + crow_distance_meters(candidate, end), counter, candidate),
                )

    logging.debug("frontier exhausted after %d coordinates", len(closed))
    raise NoRouteError(start, end)


def _reconstruct(predecessor, end) -> Tuple[Route, float]:
    """Walk predecessors back from end and return the route and its length."""
    segments = []
    segment = predecessor[end]
    while segment is not None:
        segments.append(segment)
        segment = predecessor[segment.start]
    route = Route(segments=tuple(reversed(segments)))
    return route, route.length_meters


class PointToPointRouter:
    """Router bound to one street graph."""

    def __init__(self, graph: GeoGraph):
        self.graph = graph

    def route(self, start: Coordinate, end: Coordinate) -> Tuple[Route, float]:
        return route_point_to_point(graph=self.graph, start=start, end=end)


__all__ = ["route_point_to_point", "PointToPointRouter"]
