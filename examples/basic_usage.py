#!/usr/bin/env python3
"""
Basic Usage Example - Freefall Depth Stopwatch

This script demonstrates driving a measurement session on an asyncio event
loop. It shows how to:
- Load configuration and configure logging
- Start and stop timed runs while readouts update
- Rename and delete history entries
- Build the illustrative depth curve

Run: python examples/basic_usage.py
"""

import asyncio
import tempfile
from pathlib import Path

from freefall_app.config.loader import ConfigLoader
from freefall_app.logging.config import configure_logging_from_params
from freefall_app.session import MeasurementSession
from freefall_app.state.models import Readout


def print_readout(readout: Readout) -> None:
    depth_text, time_text = readout.formatted()
    print(f"\r   Depth(m) {depth_text:>8}   Time(s) {time_text:>6}", end="", flush=True)


def print_history(session: MeasurementSession) -> None:
    if not session.history:
        print("   (no measurements)")
        return
    for index, measurement in enumerate(session.history):
        print(f"   [{index}] {measurement.name:<16} "
              f"{measurement.depth:8.2f} m  {measurement.elapsed_time:6.2f} s")


async def main() -> None:
    print("🪨 Freefall Stopwatch - Basic Usage Example")
    print("=" * 50)

    with tempfile.TemporaryDirectory() as temp_dir:
        db_path = str(Path(temp_dir) / "demo.db")

        print("\n1. Loading configuration...")
        config = ConfigLoader.create().load_config({
            "storage": {"db_path": db_path},
            "logging": {"level": "WARNING"},
        })
        configure_logging_from_params(config.logging)
        print(f"   Sample interval: {config.timer.sample_interval_ms} ms")
        print(f"   Gravity: {config.physics.gravity} m/s^2")

        with MeasurementSession.create(config=config, on_readout=print_readout) as session:
            print("\n2. Timing two falls...")
            for seconds in (1.0, 1.5):
                session.start()
                await asyncio.sleep(seconds)
                session.stop()
                print()

            print("\n3. Measurement history:")
            print_history(session)

            print("\n4. Renaming the first entry and deleting the second...")
            session.rename(0, "Well")
            session.delete(1)
            print_history(session)

        print("\n5. Reloading history from storage in a fresh session...")
        with MeasurementSession.create(config=config) as reloaded:
            print_history(reloaded)

            print("\n6. Depth curve (every 2 s):")
            for point in reloaded.curve()[::4]:
                print(f"   t={point.elapsed_time:5.1f} s  depth={point.depth:7.2f} m")

    print("\n✅ Demo completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
