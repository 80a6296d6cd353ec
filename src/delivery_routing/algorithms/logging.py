from dataclasses import dataclass, asdict, field

import pandas as pd


@dataclass(frozen=True)
class EpochLog:
    """Summary of one annealing epoch at fixed temperature."""

    epoch: int = 0
    temperature_meters: float = None
    attempts: int = 0
    accepted: int = 0
    length_meters: float = None

    @property
    def data_frame(self):
        return pd.DataFrame(
            asdict(self),
            index=[
                0,
            ],
        )


@dataclass
class AnnealingLog:
    """Accepted tour lengths and per-epoch summaries of one optimization."""

    initial_length_meters: float = 0.0
    accepted_lengths_meters: list[float] = field(default_factory=list)
    epochs: list[EpochLog] = field(default_factory=list)

    @property
    def num_accepted(self) -> int:
        return len(self.accepted_lengths_meters)

    @property
    def data_frame(self):
        """One row per epoch."""
        if not self.epochs:
            return pd.DataFrame(columns=list(EpochLog.__dataclass_fields__))
        return pd.concat((e.data_frame for e in self.epochs), ignore_index=True)

    def to_dict(self) -> dict:
        return {
            "initial_length_meters": float(self.initial_length_meters),
            "accepted_lengths_meters": [float(l) for l in self.accepted_lengths_meters],
            "epochs": [asdict(e) for e in self.epochs],
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            initial_length_meters=data["initial_length_meters"],
            accepted_lengths_meters=list(data["accepted_lengths_meters"]),
            epochs=[EpochLog(**e) for e in data["epochs"]],
        )
