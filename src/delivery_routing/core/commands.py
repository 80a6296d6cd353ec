"""Driving commands produced for a delivery plan."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal

from .geodesics import meters_to_miles


@dataclass(frozen=True)
class Command:
    """Base class of all driving commands."""

    kind = "command"

    def describe(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Command:
        """Construct the matching command subclass from dict."""
        kinds = {cls.kind: cls for cls in (Deliver, Proceed, Turn)}
        payload = {k: v for k, v in data.items() if k != "kind"}
        return kinds[data["kind"]](**payload)


@dataclass(frozen=True)
class Deliver(Command):
    """Hand over an item at the current location."""

    item: str
    kind = "deliver"

    def describe(self) -> str:
        return f"Deliver {self.item}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "item": self.item}


@dataclass(frozen=True)
class Proceed(Command):
    """Drive along a street in a compass direction for some distance."""

    direction: str
    street_name: str
    distance_meters: float
    kind = "proceed"

    def extend(self, distance_meters: float = None) -> Proceed:
        """Same command covering additional distance."""
        return replace(self, distance_meters=self.distance_meters + distance_meters)

    @property
    def distance_miles(self) -> float:
        return meters_to_miles(self.distance_meters)

    def describe(self) -> str:
        return (
            f"Proceed {self.distance_miles:.2f} miles {self.direction} "
            f"on {self.street_name}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "direction": self.direction,
            "street_name": self.street_name,
            "distance_meters": float(self.distance_meters),
        }


@dataclass(frozen=True)
class Turn(Command):
    """Turn left or right onto a street."""

    direction: Literal["left", "right"]
    street_name: str
    kind = "turn"

    def describe(self) -> str:
        return f"Turn {self.direction} on {self.street_name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "direction": self.direction,
            "street_name": self.street_name,
        }
