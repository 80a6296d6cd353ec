"""User-facing/app layer: delivery planning, configuration and CLI."""

from .planner import (
    StageLog,
    PlanningLog,
    PlanResult,
    DeliveryPlanner,
)
from .config import AnnealingParams, PlannerConfig
from .cli import build_config

__all__ = [
    "StageLog",
    "PlanningLog",
    "PlanResult",
    "DeliveryPlanner",
    "AnnealingParams",
    "PlannerConfig",
    "build_config",
]
