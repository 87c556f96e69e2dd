"""
Measurement session coordinator.

Wires the run timer to the measurement history and exposes the surface a
presentation layer drives: current readout and run state, the history
snapshot, and the start/stop/rename/delete intents.
"""

from typing import Optional

import structlog

from .config.defaults import AppConfig, get_default_config
from .persistence.history_store import HistoryStore
from .persistence.storage import KeyValueStorage, SqliteStorage
from .physics import CurvePoint, depth_curve
from .state.models import Measurement, Readout, RunState
from .state.timer import ReadoutListener, RunTimer
from .utils.time import AsyncioScheduler, Clock, MonotonicClock, Scheduler

logger = structlog.get_logger(__name__)


class MeasurementSession:
    """
    Presentation boundary for the stopwatch.

    Flow: start() → ticks update the readout → stop() → the completed
    measurement is appended to the persisted history.

    Use as a context manager so a running tick is always cancelled when the
    hosting context goes away.
    """

    def __init__(self, timer: RunTimer, history: HistoryStore, config: AppConfig) -> None:
        self.logger = logger
        self.timer = timer
        self.history_store = history
        self.config = config

    @classmethod
    def create(
        cls,
        config: Optional[AppConfig] = None,
        storage: Optional[KeyValueStorage] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        on_readout: Optional[ReadoutListener] = None
    ) -> "MeasurementSession":
        """Build a session from configuration and load the stored history."""
        if config is None:
            config = get_default_config()

        if storage is None:
            storage = SqliteStorage(config.storage.db_path)

        timer = RunTimer(
            clock=clock or MonotonicClock(),
            scheduler=scheduler or AsyncioScheduler(),
            sample_interval=config.timer.sample_interval_ms / 1000.0,
            gravity=config.physics.gravity,
            default_name=config.history.default_name,
            on_readout=on_readout
        )
        history = HistoryStore(storage, slot_key=config.history.slot_key)
        history.load()

        session = cls(timer=timer, history=history, config=config)
        session.logger.info(
            "Measurement session ready",
            history_count=len(history),
            sample_interval_ms=config.timer.sample_interval_ms
        )
        return session

    @property
    def readout(self) -> Readout:
        return self.timer.readout

    @property
    def run_state(self) -> RunState:
        return self.timer.state

    @property
    def is_running(self) -> bool:
        return self.timer.is_running

    @property
    def history(self) -> tuple[Measurement, ...]:
        return self.history_store.entries

    def start(self) -> bool:
        """Start a run; a no-op while one is running."""
        return self.timer.start()

    def stop(self) -> Optional[Measurement]:
        """Stop the run and append its measurement to the history, if any."""
        measurement = self.timer.stop()
        if measurement is not None:
            self.history_store.append(measurement)
        return measurement

    def toggle(self) -> Optional[Measurement]:
        """Single start/stop control: start when idle, stop when running."""
        if self.timer.is_running:
            return self.stop()
        self.timer.start()
        return None

    def rename(self, index: int, name: str) -> None:
        self.history_store.rename(index, name)

    def delete(self, index: int) -> Measurement:
        return self.history_store.delete(index)

    def curve(self) -> list[CurvePoint]:
        """Illustrative depth curve for the configured chart range."""
        return depth_curve(
            self.config.chart.duration_s,
            self.config.chart.step_s,
            gravity=self.config.physics.gravity
        )

    def close(self) -> None:
        """Cancel any running tick; the in-progress run is discarded."""
        self.timer.close()

    def __enter__(self) -> "MeasurementSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
