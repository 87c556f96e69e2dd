"""
Free-fall depth model.

depth = g * t^2 / 2, with the object released from rest and air resistance
ignored. The live readout and the precomputed chart curve both go through
``depth`` so the two never diverge.
"""

from dataclasses import dataclass

GRAVITY = 9.8  # m/s^2


@dataclass(frozen=True)
class CurvePoint:
    """One sample of the illustrative depth curve."""
    elapsed_time: float    # seconds
    depth: float           # meters


def depth(elapsed_time: float, gravity: float = GRAVITY) -> float:
    """
    Depth in meters reached after falling for ``elapsed_time`` seconds.

    Defined for ``elapsed_time >= 0``; callers only ever pass elapsed time
    measured from a start instant.
    """
    return gravity * elapsed_time ** 2 / 2


def depth_curve(duration: float, step: float, gravity: float = GRAVITY) -> list[CurvePoint]:
    """
    Sample ``depth`` at fixed time steps from 0 up to and including ``duration``.

    Args:
        duration: Last time to sample, in seconds
        step: Spacing between samples, in seconds
        gravity: Gravitational acceleration in m/s^2

    Returns:
        Curve points in increasing time order

    Raises:
        ValueError: If step is not positive or duration is negative
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if duration < 0:
        raise ValueError(f"duration must be non-negative, got {duration}")

    # Index-based sampling avoids accumulating float error across steps
    count = int(duration / step + 1e-9)
    times = [i * step for i in range(count + 1)]
    if duration - times[-1] > 1e-9:
        times.append(duration)

    return [CurvePoint(elapsed_time=t, depth=depth(t, gravity)) for t in times]
