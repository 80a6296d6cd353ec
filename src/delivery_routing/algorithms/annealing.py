from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np

from ..core.config import (
    COOLING_RATE_DEFAULT,
    EPOCHS_DEFAULT,
    INITIAL_TEMPERATURE_METERS_DEFAULT,
    MIN_EXCLUDED_FRACTION_DEFAULT,
)
from ..core.geodesics import get_distance_matrix_meters
from ..core.streets import Coordinate, DeliveryRequest
from .logging import AnnealingLog, EpochLog


@dataclass(frozen=True)
class TourResult:
    """Stop order found by the optimizer with crow distances before and after."""

    stops: Tuple[DeliveryRequest, ...]
    initial_distance_meters: float
    final_distance_meters: float
    log: AnnealingLog = field(default_factory=AnnealingLog, compare=False)


def tour_length(tour: np.ndarray = None, distances: np.ndarray = None) -> float:
    """Length of a closed tour given as indices into a distance matrix."""
    tour = np.asarray(tour)
    return float(distances[tour[:-1], tour[1:]].sum())


def sample_span(
    num_positions: int = None,
    rng=None,
    min_excluded_fraction: float = MIN_EXCLUDED_FRACTION_DEFAULT,
) -> Tuple[int, int]:
    """Draw the bounds of a span of interior tour positions.

    Positions 0 and ``num_positions - 1`` hold the depot and are never part
    of the span. Draws are repeated until the span has at least two
    positions and the positions outside of it make up at least
    ``min_excluded_fraction`` of the tour.

    Parameters
    ----------
    num_positions : int
        Length of the closed tour including both depot entries. Needs at
        least two interior positions.
    rng : np.random.Generator
        Random number generator
    min_excluded_fraction : float, default=0.2
        Minimal share of tour positions outside of the span.

    Returns
    -------
    tuple of int
        Inclusive span bounds (i, j) with 1 <= i < j <= num_positions - 2.
    """
    num_interior = num_positions - 2
    if num_interior < 2:
        raise ValueError("A span needs at least two interior positions.")
    if num_positions - 2 < min_excluded_fraction * num_positions:
        raise ValueError("No span leaves enough positions outside of it.")
    while True:
        i, j = (int(k) for k in rng.integers(1, num_interior + 1, size=2))
        if i > j:
            i, j = j, i
        if i == j:
            continue
        if num_positions - (j - i) - 1 >= min_excluded_fraction * num_positions:
            return i, j


def reverse_span(tour: np.ndarray = None, i: int = None, j: int = None) -> np.ndarray:
    """Tour with positions i..j (inclusive) in reverse order."""
    new_tour = np.array(tour)
    new_tour[i : j + 1] = new_tour[i : j + 1][::-1]
    return new_tour


def relocate_span(
    tour: np.ndarray = None, i: int = None, j: int = None, position: int = None
) -> np.ndarray:
    """Tour with positions i..j (inclusive) moved as a block.

    The block keeps its internal order and is inserted in front of
    ``position`` of the tour with the block removed. ``position`` must lie in
    ``[1, len(tour) - (j - i + 1) - 1]`` so that both depot entries stay in
    place.
    """
    tour = np.asarray(tour)
    block = tour[i : j + 1]
    rest = np.concatenate((tour[:i], tour[j + 1 :]))
    if not 1 <= position <= len(rest) - 1:
        raise ValueError(f"Insert position {position} touches the depot.")
    return np.concatenate((rest[:position], block, rest[position:]))


def propose_move(
    tour: np.ndarray = None,
    rng=None,
    min_excluded_fraction: float = MIN_EXCLUDED_FRACTION_DEFAULT,
) -> np.ndarray:
    """Candidate tour: reverse or relocate a random span with equal odds."""
    num_positions = len(tour)
    i, j = sample_span(
        num_positions=num_positions,
        rng=rng,
        min_excluded_fraction=min_excluded_fraction,
    )
    if rng.random() < 0.5:
        return reverse_span(tour, i, j)
    span_size = j - i + 1
    position = int(rng.integers(1, num_positions - span_size))
    return relocate_span(tour, i, j, position)


def optimize_delivery_order(
    depot: Coordinate = None,
    stops: Sequence[DeliveryRequest] = None,
    rng=None,
    epochs: int = EPOCHS_DEFAULT,
    initial_temperature_meters: float = INITIAL_TEMPERATURE_METERS_DEFAULT,
    cooling_rate: float = COOLING_RATE_DEFAULT,
    attempts_per_epoch: int | None = None,
    acceptance_threshold: int | None = None,
    min_excluded_fraction: float = MIN_EXCLUDED_FRACTION_DEFAULT,
    accept_worsening: bool = True,
) -> TourResult:
    """Reorder stops to shorten the closed tour from and back to the depot.

    Simulated annealing over the tour ``[depot, stop_1, ..., stop_N, depot]``
    measured in great-circle distance. Each epoch runs at a fixed temperature
    which is multiplied by ``cooling_rate`` afterwards. Within an epoch,
    candidate tours are proposed by reversing or relocating a span of stops.
    Shorter candidates are always accepted, longer ones with probability
    ``exp(-delta / temperature)``.

    Parameters
    ----------
    depot : Coordinate
        Start and end of the tour.
    stops : sequence of DeliveryRequest
        Stops in their initial order.
    rng : np.random.Generator, optional
        Random number generator (defaults to a freshly seeded generator)
    epochs : int, default=100
        Number of temperature steps.
    initial_temperature_meters : float
        Temperature of the first epoch (0.5 miles by default).
    cooling_rate : float, default=0.9
        Factor applied to the temperature after each epoch.
    attempts_per_epoch : int, optional
        Proposals per epoch. Defaults to ``epochs * (N + 2)``.
    acceptance_threshold : int, optional
        Accepted moves after which an epoch ends early. Defaults to
        ``epochs * (N + 2)``.
    min_excluded_fraction : float, default=0.2
        Minimal share of tour positions outside a proposed span.
    accept_worsening : bool, default=True
        If False, longer candidates are always rejected.

    Returns
    -------
    TourResult
        Reordered stops, initial and final tour lengths in meters, and the log.
        The final order is the last accepted tour, not necessarily the
        shortest one seen.
    """
    stops = tuple(stops or ())
    if rng is None:
        rng = np.random.default_rng()

    locations = (depot,) + tuple(s.location for s in stops)
    distances = get_distance_matrix_meters(
        lon=[c.lon for c in locations], lat=[c.lat for c in locations]
    )
    tour = np.array([0] + list(range(1, len(stops) + 1)) + [0])
    initial_length = tour_length(tour, distances)
    log = AnnealingLog(initial_length_meters=initial_length)

    if len(stops) <= 1:
        return TourResult(
            stops=stops,
            initial_distance_meters=initial_length,
            final_distance_meters=initial_length,
            log=log,
        )

    num_positions = len(tour)
    if attempts_per_epoch is None:
        attempts_per_epoch = epochs * num_positions
    if acceptance_threshold is None:
        acceptance_threshold = epochs * num_positions

    current_length = initial_length
    temperature = initial_temperature_meters
    for epoch in range(epochs):
        accepted = 0
        attempts = 0
        while attempts < attempts_per_epoch and accepted < acceptance_threshold:
            attempts += 1
            candidate = propose_move(
                tour, rng=rng, min_excluded_fraction=min_excluded_fraction
            )
            candidate_length = tour_length(candidate, distances)
            delta = candidate_length - current_length
            if delta < 0.0:
                accept = True
            elif delta > 0.0 and accept_worsening:
                accept = rng.random() < np.exp(-delta / temperature)
            else:
                accept = False
            if accept:
                tour, current_length = candidate, candidate_length
                accepted += 1
                log.accepted_lengths_meters.append(current_length)
        log.epochs.append(
            EpochLog(
                epoch=epoch,
                temperature_meters=float(temperature),
                attempts=attempts,
                accepted=accepted,
                length_meters=current_length,
            )
        )
        temperature *= cooling_rate

    logging.info(
        "tour of %d stops: %.1f m -> %.1f m after %d accepted moves",
        len(stops),
        initial_length,
        current_length,
        log.num_accepted,
    )
    return TourResult(
        stops=tuple(stops[k - 1] for k in tour[1:-1]),
        initial_distance_meters=initial_length,
        final_distance_meters=current_length,
        log=log,
    )


class TourOptimizer:
    """Simulated annealing stop-order optimizer with fixed parameters."""

    def __init__(self, **params):
        self.params = params

    def optimize(self, depot, stops, rng=None) -> TourResult:
        return optimize_delivery_order(depot=depot, stops=stops, rng=rng, **self.params)


__all__ = [
    "TourResult",
    "TourOptimizer",
    "tour_length",
    "sample_span",
    "reverse_span",
    "relocate_span",
    "propose_move",
    "optimize_delivery_order",
]
