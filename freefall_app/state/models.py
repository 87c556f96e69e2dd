"""
Data models for the stopwatch run lifecycle and measurement records.

This module defines immutable data structures for run state, live readouts
and completed measurements, including the measurement wire format used by
persisted history.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

DEFAULT_MEASUREMENT_NAME = "Measurement"


class RunState(str, Enum):
    """Run timer states."""
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class RunStatus:
    """Run state plus the instant the current run started, if any."""

    state: RunState = RunState.IDLE
    start_instant: Optional[float] = None

    @classmethod
    def idle(cls) -> 'RunStatus':
        return cls(state=RunState.IDLE)

    @classmethod
    def running(cls, start_instant: float) -> 'RunStatus':
        return cls(state=RunState.RUNNING, start_instant=start_instant)


@dataclass(frozen=True)
class Readout:
    """Live (depth, elapsed time) pair; ``None`` means not yet sampled."""

    depth: Optional[float] = None                    # meters
    elapsed_time: Optional[float] = None             # seconds

    @classmethod
    def empty(cls) -> 'Readout':
        return cls()

    @property
    def sampled(self) -> bool:
        return self.depth is not None and self.elapsed_time is not None

    def formatted(self) -> tuple[str, str]:
        """Display strings for depth and time, two decimals each."""
        depth_text = f"{self.depth:.2f}" if self.depth is not None else "0"
        time_text = f"{self.elapsed_time if self.elapsed_time is not None else 0.0:.2f}"
        return depth_text, time_text


@dataclass(frozen=True)
class Measurement:
    """Record of one completed run; only ``name`` is ever replaced."""

    depth: float                                     # meters
    elapsed_time: float                              # seconds
    name: str = DEFAULT_MEASUREMENT_NAME

    def with_name(self, name: str) -> 'Measurement':
        """Create a copy carrying a new label."""
        return Measurement(depth=self.depth, elapsed_time=self.elapsed_time, name=name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted wire form."""
        return {
            "depth": self.depth,
            "elapsedTime": self.elapsed_time,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Measurement':
        """Build from the persisted wire form; shape is checked by the caller."""
        return cls(
            depth=float(data["depth"]),
            elapsed_time=float(data["elapsedTime"]),
            name=data["name"],
        )
