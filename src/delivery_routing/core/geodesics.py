import numpy as np
import pint
import pyproj

# Create unit registry and great-circle geoid once at module level
_ureg = pint.UnitRegistry()
_geod = pyproj.Geod(ellps="sphere")

COMPASS_POINTS = (
    "east",
    "northeast",
    "north",
    "northwest",
    "west",
    "southwest",
    "south",
    "southeast",
)


def meters_to_miles(distance_meters: float) -> float:
    """Convert distance from meters to statute miles."""
    return float((distance_meters * _ureg.meter) / _ureg.mile)


def miles_to_meters(distance_miles: float) -> float:
    """Convert distance from statute miles to meters."""
    return float((distance_miles * _ureg.mile) / _ureg.meter)


def get_distance_meters(
    lon_start: float = None,
    lon_end: float = None,
    lat_start: float = None,
    lat_end: float = None,
):
    """Calculate great-circle distance between two points.

    Parameters
    ----------
    lon_start : float
        Starting longitude in degrees
    lon_end : float
        Ending longitude in degrees
    lat_start : float
        Starting latitude in degrees
    lat_end : float
        Ending latitude in degrees

    Returns
    -------
    float
        Distance in meters along the great circle
    """
    _, _, distance_meters = _geod.inv(
        lons1=lon_start,
        lons2=lon_end,
        lats1=lat_start,
        lats2=lat_end,
    )
    return distance_meters


def crow_distance_meters(start=None, end=None) -> float:
    """Straight-line (great-circle) distance between two coordinates.

    Both arguments need ``lon`` and ``lat`` attributes in degrees.
    """
    return float(
        get_distance_meters(
            lon_start=start.lon,
            lon_end=end.lon,
            lat_start=start.lat,
            lat_end=end.lat,
        )
    )


def get_distance_matrix_meters(lon=None, lat=None) -> np.ndarray:
    """Pairwise great-circle distances.

    Parameters
    ----------
    lon : array-like of float
        Longitudes in degrees
    lat : array-like of float
        Latitudes in degrees

    Returns
    -------
    np.ndarray
        Symmetric (n, n) matrix of distances in meters with zero diagonal
    """
    lon = np.asarray(lon, dtype=float)
    lat = np.asarray(lat, dtype=float)
    n = len(lon)
    if n == 0:
        return np.zeros((0, 0))
    lon_start, lon_end = np.meshgrid(lon, lon, indexing="ij")
    lat_start, lat_end = np.meshgrid(lat, lat, indexing="ij")
    _, _, distances = _geod.inv(
        lons1=lon_start.ravel(),
        lats1=lat_start.ravel(),
        lons2=lon_end.ravel(),
        lats2=lat_end.ravel(),
    )
    distances = np.asarray(distances, dtype=float).reshape(n, n)
    np.fill_diagonal(distances, 0.0)
    return distances


def get_line_angle_degrees(
    lon_start: float = None,
    lat_start: float = None,
    lon_end: float = None,
    lat_end: float = None,
) -> float:
    """Angle of a line in degrees.

    The angle is measured in the lon/lat plane, counter-clockwise from east,
    and lies in [0, 360).
    """
    angle = np.degrees(np.arctan2(lat_end - lat_start, lon_end - lon_start))
    if angle < 0:
        angle += 360.0
    return float(angle)


def get_angle_between_degrees(angle_first: float = None, angle_second: float = None):
    """Counter-clockwise angle from the first to the second line in [0, 360)."""
    angle = angle_second - angle_first
    if angle < 0:
        angle += 360.0
    return float(angle)


def compass_direction(angle_degrees: float = None) -> str:
    """Name of the 45 degree compass sector containing the angle.

    Sectors are centred on east (0 degrees) with boundaries at 22.5, 67.5, ...
    degrees, so that 350 degrees is still east.
    """
    sector = int(((angle_degrees % 360.0) + 22.5) // 45.0) % 8
    return COMPASS_POINTS[sector]
