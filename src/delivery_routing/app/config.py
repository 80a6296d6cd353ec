from __future__ import annotations

from dataclasses import dataclass, field

from ..core.config import (
    COOLING_RATE_DEFAULT,
    EPOCHS_DEFAULT,
    INITIAL_TEMPERATURE_METERS_DEFAULT,
    MIN_EXCLUDED_FRACTION_DEFAULT,
)


@dataclass(frozen=True)
class AnnealingParams:
    """Simulated annealing schedule for the stop-order optimizer."""

    epochs: int = EPOCHS_DEFAULT  # E
    initial_temperature_meters: float = INITIAL_TEMPERATURE_METERS_DEFAULT  # T0
    cooling_rate: float = COOLING_RATE_DEFAULT
    attempts_per_epoch: int | None = None  # None: E * (N + 2)
    acceptance_threshold: int | None = None  # None: E * (N + 2)
    min_excluded_fraction: float = MIN_EXCLUDED_FRACTION_DEFAULT
    accept_worsening: bool = True

    def __post_init__(self):
        if self.epochs < 0:
            raise ValueError("epochs must not be negative")
        if self.initial_temperature_meters <= 0:
            raise ValueError("initial temperature must be positive")
        if not 0 < self.cooling_rate <= 1:
            raise ValueError("cooling rate must be in (0, 1]")
        if not 0 <= self.min_excluded_fraction <= 0.5:
            raise ValueError("min excluded fraction must be in [0, 0.5]")


@dataclass(frozen=True)
class PlannerConfig:
    """Top-level configuration consumed by the delivery planner."""

    name: str = "Deliveries"
    map_path: str | None = None
    deliveries_path: str | None = None
    random_seed: int | None = None
    annealing: AnnealingParams = field(default_factory=AnnealingParams)
