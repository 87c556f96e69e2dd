"""
Run timer state machine.

Idle --start()--> Running --stop()--> Idle

While running, a repeating tick samples elapsed time since the start instant
and publishes depth and elapsed time as the current readout. Stopping freezes
the last readout and emits it as a completed Measurement. A run stopped
before its first tick emits nothing.
"""

from typing import Callable, Optional

from ..logging.config import get_state_logger, log_state_transition
from ..physics import GRAVITY, depth
from ..utils.time import Clock, Scheduler, TickHandle
from .models import DEFAULT_MEASUREMENT_NAME, Measurement, Readout, RunState, RunStatus

state_logger = get_state_logger(__name__)

DEFAULT_SAMPLE_INTERVAL = 0.1  # seconds

ReadoutListener = Callable[[Readout], None]


class RunTimer:
    """Stopwatch that samples free-fall depth while running."""

    def __init__(
        self,
        clock: Clock,
        scheduler: Scheduler,
        sample_interval: float = DEFAULT_SAMPLE_INTERVAL,
        gravity: float = GRAVITY,
        default_name: str = DEFAULT_MEASUREMENT_NAME,
        on_readout: Optional[ReadoutListener] = None
    ) -> None:
        if sample_interval <= 0:
            raise ValueError(f"sample_interval must be positive, got {sample_interval}")

        self.logger = state_logger
        self.clock = clock
        self.scheduler = scheduler
        self.sample_interval = sample_interval
        self.gravity = gravity
        self.default_name = default_name
        self.on_readout = on_readout

        self._status = RunStatus.idle()
        self._readout = Readout.empty()
        self._tick: Optional[TickHandle] = None
        self._run_id = 0

    @property
    def status(self) -> RunStatus:
        return self._status

    @property
    def state(self) -> RunState:
        return self._status.state

    @property
    def is_running(self) -> bool:
        return self._status.state == RunState.RUNNING

    @property
    def readout(self) -> Readout:
        """Current readout; frozen at the last sample after a stop."""
        return self._readout

    def start(self) -> bool:
        """
        Start a run.

        Returns:
            True if a run was started, False if one was already running
        """
        if self.is_running:
            self.logger.debug("Ignored start while running", run_id=self._run_id)
            return False

        self._run_id += 1
        start_instant = self.clock.now()
        self._status = RunStatus.running(start_instant)
        self._readout = Readout.empty()
        self._publish()
        self._tick = self.scheduler.call_every(self.sample_interval, self.sample)

        log_state_transition(
            self.logger,
            run_id=self._run_id,
            from_state=RunState.IDLE.value,
            to_state=RunState.RUNNING.value,
            trigger="start",
            context={
                "start_instant": start_instant,
                "sample_interval": self.sample_interval
            }
        )
        return True

    def sample(self) -> Optional[Readout]:
        """
        Take one sample of elapsed time and depth.

        Installed as the repeating tick callback. A tick arriving after the
        run ended is ignored.

        Returns:
            The published readout, or None if no run is active
        """
        start_instant = self._status.start_instant
        if not self.is_running or start_instant is None:
            self.logger.debug("Ignored tick while idle", run_id=self._run_id)
            return None

        elapsed = max(0.0, self.clock.now() - start_instant)
        self._readout = Readout(depth=depth(elapsed, self.gravity), elapsed_time=elapsed)
        self._publish()
        return self._readout

    def stop(self) -> Optional[Measurement]:
        """
        Stop the current run.

        Returns:
            The completed measurement, or None if no run was active or no
            sample was taken before stopping
        """
        if not self.is_running:
            self.logger.debug("Ignored stop while idle", run_id=self._run_id)
            return None

        self._cancel_tick()
        self._status = RunStatus.idle()

        readout = self._readout
        measurement = None
        if readout.sampled:
            measurement = Measurement(
                depth=readout.depth,
                elapsed_time=readout.elapsed_time,
                name=self.default_name
            )
        else:
            self.logger.info("Run stopped before first sample", run_id=self._run_id)

        log_state_transition(
            self.logger,
            run_id=self._run_id,
            from_state=RunState.RUNNING.value,
            to_state=RunState.IDLE.value,
            trigger="stop",
            context={
                "depth": readout.depth,
                "elapsed_time": readout.elapsed_time,
                "emitted": measurement is not None
            }
        )
        return measurement

    def close(self) -> None:
        """Tear down: cancel any installed tick without emitting a measurement."""
        if not self.is_running:
            self._cancel_tick()
            return

        self._cancel_tick()
        self._status = RunStatus.idle()

        log_state_transition(
            self.logger,
            run_id=self._run_id,
            from_state=RunState.RUNNING.value,
            to_state=RunState.IDLE.value,
            trigger="close"
        )

    def _cancel_tick(self) -> None:
        if self._tick is not None:
            self._tick.cancel()
            self._tick = None

    def _publish(self) -> None:
        if self.on_readout is not None:
            self.on_readout(self._readout)
