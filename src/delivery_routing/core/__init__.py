"""Core layer: coordinates, segments, routes, commands, street graph and data."""

from .streets import Coordinate, Segment, DeliveryRequest, Route, COORDINATE_PRECISION
from .commands import Command, Deliver, Proceed, Turn
from .graph import GeoGraph, StreetRecord
from .errors import (
    DeliveryRoutingError,
    MapLoadError,
    RoutingError,
    BadCoordinateError,
    NoRouteError,
)
from .geodesics import (
    COMPASS_POINTS,
    meters_to_miles,
    miles_to_meters,
    get_distance_meters,
    crow_distance_meters,
    get_distance_matrix_meters,
    get_line_angle_degrees,
    get_angle_between_degrees,
    compass_direction,
)
from .data import read_street_records, load_street_map, load_deliveries

__all__ = [
    "Coordinate",
    "Segment",
    "DeliveryRequest",
    "Route",
    "COORDINATE_PRECISION",
    "Command",
    "Deliver",
    "Proceed",
    "Turn",
    "GeoGraph",
    "StreetRecord",
    "DeliveryRoutingError",
    "MapLoadError",
    "RoutingError",
    "BadCoordinateError",
    "NoRouteError",
    "COMPASS_POINTS",
    "meters_to_miles",
    "miles_to_meters",
    "get_distance_meters",
    "crow_distance_meters",
    "get_distance_matrix_meters",
    "get_line_angle_degrees",
    "get_angle_between_degrees",
    "compass_direction",
    "read_street_records",
    "load_street_map",
    "load_deliveries",
]
