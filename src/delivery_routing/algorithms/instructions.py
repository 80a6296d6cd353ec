from __future__ import annotations

from typing import Sequence

from ..core.commands import Command, Deliver, Proceed, Turn
from ..core.config import STRAIGHT_TOLERANCE_DEGREES
from ..core.geodesics import compass_direction, get_angle_between_degrees
from ..core.streets import Coordinate, DeliveryRequest, Route, Segment


def classify_turn(angle_degrees: float = None) -> str | None:
    """Turn direction for the angle between two headings.

    Returns None if the angle is within the straight-ahead tolerance,
    "left" for [1, 180) and "right" for [180, 359] degrees.
    """
    if (
        angle_degrees < STRAIGHT_TOLERANCE_DEGREES
        or angle_degrees > 360.0 - STRAIGHT_TOLERANCE_DEGREES
    ):
        return None
    if angle_degrees < 180.0:
        return "left"
    return "right"


def _proceed(segment: Segment) -> Proceed:
    return Proceed(
        direction=compass_direction(segment.angle_degrees),
        street_name=segment.street_name,
        distance_meters=segment.length_meters,
    )


def synthesize_commands(
    path: Route = None,
    stops: Sequence[DeliveryRequest] = None,
    depot: Coordinate = None,
) -> list[Command]:
    """Narrate a path as deliver, proceed and turn commands.

    Parameters
    ----------
    path : Route
        Full path from the depot through all stops back to the depot.
    stops : sequence of DeliveryRequest
        Stops in the order they are visited along the path.
    depot : Coordinate
        Where the path begins and ends. Only needed for an empty path.

    Returns
    -------
    list of Command
        Each stop is delivered once, where its location is first reached in
        stop order. A delivery ends the current proceed command; travel
        afterwards starts with a fresh proceed command.

    Raises
    ------
    ValueError
        If a stop is never reached along the path.
    """
    stops = tuple(stops or ())
    commands: list[Command] = []
    next_stop = 0

    def deliver_at(coordinate):
        nonlocal next_stop
        delivered = False
        while next_stop < len(stops) and stops[next_stop].location == coordinate:
            commands.append(Deliver(item=stops[next_stop].item))
            next_stop += 1
            delivered = True
        return delivered

    proceeding = False
    previous = None
    for segment in path.segments:
        if deliver_at(segment.start):
            proceeding = False
        if not proceeding:
            commands.append(_proceed(segment))
            proceeding = True
            previous = segment
            continue
        turn = classify_turn(
            get_angle_between_degrees(previous.angle_degrees, segment.angle_degrees)
        )
        if turn is not None and segment.street_name != previous.street_name:
            commands.append(Turn(direction=turn, street_name=segment.street_name))
            commands.append(_proceed(segment))
        elif commands[-1].street_name == segment.street_name:
            commands[-1] = commands[-1].extend(segment.length_meters)
        else:
            commands.append(_proceed(segment))
        previous = segment

    deliver_at(path.end if len(path) else depot)
    if next_stop < len(stops):
        raise ValueError(
            f"stop {stops[next_stop].item!r} at {stops[next_stop].location} "
            "is not reached along the path"
        )
    return commands


__all__ = ["classify_turn", "synthesize_commands"]
