from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any, Sequence

import numpy as np
import pandas as pd

from ..algorithms import (
    AnnealingLog,
    TourResult,
    optimize_delivery_order,
    route_point_to_point,
    synthesize_commands,
)
from ..core.commands import Command
from ..core.geodesics import meters_to_miles
from ..core.graph import GeoGraph
from ..core.streets import Coordinate, DeliveryRequest, Route
from .config import PlannerConfig


@dataclass
class StageLog:
    """Record of a single planning stage event."""

    name: str
    metrics: dict[str, Any]
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="seconds")
    )

    def to_record(self) -> dict[str, Any]:
        """Return a flat record with stage, timestamp, and metrics."""
        return {
            "stage": self.name,
            "timestamp": self.timestamp,
            **self.metrics,
        }


@dataclass
class PlanningLog:
    """Configuration and stage metrics of one planning run."""

    config: dict[str, Any]
    stages: list[StageLog] = field(default_factory=list)

    def add_stage(self, name: str, **metrics: Any) -> None:
        """Append a stage log entry."""
        self.stages.append(StageLog(name=name, metrics=dict(metrics)))

    def stages_named(self, name: str) -> list[StageLog]:
        """Return all stage logs matching the provided name."""
        return [stage for stage in self.stages if stage.name == name]

    def to_dataframe(self) -> "pd.DataFrame":
        """Convert logs to a pandas DataFrame.

        Includes all stages with columns: stage, timestamp, and metric keys.
        """
        records = [s.to_record() for s in self.stages]
        if not records:
            return pd.DataFrame(columns=["stage", "timestamp"])

        df = pd.DataFrame(records)
        df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce")
        return df

    def to_dict(self) -> dict[str, Any]:
        """Return log contents as plain dict."""
        return {
            "config": self.config,
            "stages": [
                {
                    "name": stage.name,
                    "metrics": stage.metrics,
                    "timestamp": stage.timestamp,
                }
                for stage in self.stages
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlanningLog:
        return cls(
            config=data.get("config", {}),
            stages=[
                StageLog(
                    name=stage["name"],
                    metrics=stage.get("metrics", {}),
                    timestamp=stage.get("timestamp", ""),
                )
                for stage in data.get("stages", [])
            ],
        )


@dataclass
class PlanResult:
    """Container returned by DeliveryPlanner.plan."""

    commands: list[Command] = field(default_factory=list)
    total_distance_meters: float = 0.0
    stops: tuple[DeliveryRequest, ...] = ()
    path: Route = field(default_factory=Route)
    legs: list[Route] = field(default_factory=list)
    initial_crow_distance_meters: float = 0.0
    final_crow_distance_meters: float = 0.0
    annealing: AnnealingLog | None = None
    logs: PlanningLog | None = None

    @property
    def total_distance_miles(self) -> float:
        return meters_to_miles(self.total_distance_meters)

    def describe(self) -> list[str]:
        """Human-readable commands."""
        return [command.describe() for command in self.commands]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "commands": [c.to_dict() for c in self.commands],
            "total_distance_meters": float(self.total_distance_meters),
            "stops": [s.to_dict() for s in self.stops],
            "path": self.path.to_dict(),
            "legs": [leg.to_dict() for leg in self.legs],
            "initial_crow_distance_meters": float(self.initial_crow_distance_meters),
            "final_crow_distance_meters": float(self.final_crow_distance_meters),
            "annealing": self.annealing.to_dict() if self.annealing else None,
            "log": self.logs.to_dict() if self.logs else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PlanResult:
        """Reconstruct PlanResult from dictionary."""
        return cls(
            commands=[Command.from_dict(c) for c in data["commands"]],
            total_distance_meters=data["total_distance_meters"],
            stops=tuple(DeliveryRequest.from_dict(s) for s in data["stops"]),
            path=Route.from_dict(data["path"]),
            legs=[Route.from_dict(leg) for leg in data.get("legs", [])],
            initial_crow_distance_meters=data.get("initial_crow_distance_meters", 0.0),
            final_crow_distance_meters=data.get("final_crow_distance_meters", 0.0),
            annealing=(
                AnnealingLog.from_dict(data["annealing"])
                if data.get("annealing")
                else None
            ),
            logs=PlanningLog.from_dict(data["log"]) if data.get("log") else None,
        )

    def to_msgpack(self) -> bytes:
        """Serialize to MessagePack binary format."""
        import msgpack

        def _default(obj: Any):
            if isinstance(obj, np.generic):
                return obj.item()
            if isinstance(obj, Path):
                return str(obj)
            raise TypeError(f"Object of type {type(obj)!r} is not serialisable")

        return msgpack.packb(self.to_dict(), use_bin_type=True, default=_default)

    @classmethod
    def from_msgpack(cls, data: bytes) -> PlanResult:
        """Deserialize from MessagePack binary format."""
        import msgpack

        return cls.from_dict(msgpack.unpackb(data, raw=False))

    def dump_json(self, path: Path | str, *, indent: int = 2) -> None:
        """Write commands, path and logs to JSON."""

        def _default(obj: Any):
            if isinstance(obj, np.generic):
                return obj.item()
            if isinstance(obj, Path):
                return str(obj)
            raise TypeError(f"Object of type {type(obj)!r} is not JSON serialisable")

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(self.to_dict(), fh, indent=indent, default=_default)

    @classmethod
    def load_json(cls, path: Path) -> PlanResult:
        """Load a PlanResult from disk."""
        with Path(path).open("r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))


class DeliveryPlanner:
    """Plan a delivery tour over a street graph.

    Orders the stops with simulated annealing, routes every leg with A*,
    joins the legs and narrates the joined path as driving commands.
    """

    def __init__(self, graph: GeoGraph, config: PlannerConfig | None = None):
        self.graph = graph
        self.config = config or PlannerConfig()

    def plan(
        self,
        depot: Coordinate,
        stops: Sequence[DeliveryRequest],
        rng: np.random.Generator | None = None,
    ) -> PlanResult:
        """Plan the tour from depot through all stops and back.

        Raises
        ------
        BadCoordinateError
            If the depot or a stop has no entry in the street graph.
        NoRouteError
            If some leg of the tour cannot be routed.
        """
        if rng is None:
            rng = np.random.default_rng(self.config.random_seed)
        stops = tuple(stops)
        log = PlanningLog(config=asdict(self.config))

        tour = self._optimize(depot, stops, rng, log)
        legs, total_distance = self._route_legs(depot, tour.stops, log)
        path = Route.concatenate(legs)
        commands = synthesize_commands(path=path, stops=tour.stops, depot=depot)
        self._log_stage_metrics(
            log,
            "plan",
            num_commands=len(commands),
            num_segments=len(path),
            total_distance_meters=total_distance,
        )
        return PlanResult(
            commands=commands,
            total_distance_meters=total_distance,
            stops=tour.stops,
            path=path,
            legs=legs,
            initial_crow_distance_meters=tour.initial_distance_meters,
            final_crow_distance_meters=tour.final_distance_meters,
            annealing=tour.log,
            logs=log,
        )

    def _optimize(self, depot, stops, rng, log) -> TourResult:
        tour = optimize_delivery_order(
            depot=depot, stops=stops, rng=rng, **asdict(self.config.annealing)
        )
        self._log_stage_metrics(
            log,
            "optimize",
            num_stops=len(stops),
            initial_crow_distance_meters=tour.initial_distance_meters,
            final_crow_distance_meters=tour.final_distance_meters,
            accepted_moves=tour.log.num_accepted,
        )
        return tour

    def _route_legs(self, depot, stops, log) -> tuple[list[Route], float]:
        if not stops:
            return [], 0.0
        waypoints = (depot,) + tuple(s.location for s in stops) + (depot,)
        legs, total_distance = [], 0.0
        for start, end in zip(waypoints[:-1], waypoints[1:]):
            route, distance = route_point_to_point(graph=self.graph, start=start, end=end)
            logging.debug(
                "leg %s -> %s: %d segments, %.1f m", start, end, len(route), distance
            )
            legs.append(route)
            total_distance += distance
        self._log_stage_metrics(
            log, "route", num_legs=len(legs), total_distance_meters=total_distance
        )
        return legs, total_distance

    def _log_stage_metrics(
        self,
        log: PlanningLog,
        name: str,
        **metrics: Any,
    ) -> None:
        """Convenience wrapper for stage-level logging."""
        timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        logging.info("%s [%s] %s", name, timestamp, metrics)
        log.add_stage(name=name, **metrics)


__all__ = ["StageLog", "PlanningLog", "PlanResult", "DeliveryPlanner"]
