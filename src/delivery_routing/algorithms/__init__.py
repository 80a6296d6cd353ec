"""Algorithm building blocks layer: routing, tour optimization, narration."""

from .astar import PointToPointRouter, route_point_to_point
from .annealing import (
    TourOptimizer,
    TourResult,
    optimize_delivery_order,
    propose_move,
    relocate_span,
    reverse_span,
    sample_span,
    tour_length,
)
from .instructions import classify_turn, synthesize_commands
from .logging import AnnealingLog, EpochLog

__all__ = [
    "PointToPointRouter",
    "route_point_to_point",
    "TourOptimizer",
    "TourResult",
    "optimize_delivery_order",
    "propose_move",
    "relocate_span",
    "reverse_span",
    "sample_span",
    "tour_length",
    "classify_turn",
    "synthesize_commands",
    "AnnealingLog",
    "EpochLog",
]
