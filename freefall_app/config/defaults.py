"""Default configuration parameters for the freefall stopwatch."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PhysicsParams:
    """Physics model parameters."""
    gravity: float = 9.8                             # m/s^2


@dataclass(frozen=True)
class TimerParams:
    """Run timer parameters."""
    sample_interval_ms: int = 100                    # Readout sampling cadence


@dataclass(frozen=True)
class HistoryParams:
    """Measurement history parameters."""
    slot_key: str = "measurementHistory"             # Storage slot holding the JSON array
    default_name: str = "Measurement"                # Label given to new measurements


@dataclass(frozen=True)
class StorageParams:
    """Key-value storage parameters."""
    db_path: str = "freefall.db"


@dataclass(frozen=True)
class ChartParams:
    """Illustrative depth curve parameters."""
    duration_s: float = 10.0
    step_s: float = 0.5


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    physics: PhysicsParams
    timer: TimerParams
    history: HistoryParams
    storage: StorageParams
    chart: ChartParams
    logging: LoggingParams


def get_default_config() -> AppConfig:
    """Get the default configuration instance."""
    return AppConfig(
        physics=PhysicsParams(),
        timer=TimerParams(),
        history=HistoryParams(),
        storage=StorageParams(),
        chart=ChartParams(),
        logging=LoggingParams(),
    )


SECTION_TYPES = {
    "physics": PhysicsParams,
    "timer": TimerParams,
    "history": HistoryParams,
    "storage": StorageParams,
    "chart": ChartParams,
    "logging": LoggingParams,
}
