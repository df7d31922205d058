#!/usr/bin/env python3
"""
Basic Usage Example - Break Timer Engine

This script demonstrates the timer engine with a simulated clock. It shows how to:
- Initialize the engine with the SQLite store and the default notifier
- Configure the work duration
- Start a session and tick through the break threshold
- Resume the session in a fresh engine, as after a restart

Run: python examples/basic_usage.py
"""

import asyncio
import tempfile
from dataclasses import asdict
from pathlib import Path

from breaktimer_app.config.loader import ConfigLoader
from breaktimer_app.engine import TimerEngine
from breaktimer_app.logging.config import configure_logging
from breaktimer_app.state.models import TimerSnapshot
from breaktimer_app.utils.time import MS_PER_MINUTE, MS_PER_SECOND, now_ms


class SimulatedClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: int):
        self.current = start_ms

    def __call__(self) -> int:
        return self.current

    def advance(self, ms: int) -> None:
        self.current += ms


def print_snapshot(label: str, snapshot: TimerSnapshot) -> None:
    """Print what a view would render."""
    print(f"📊 {label}")
    print(f"  State: {snapshot.state.value}")
    print(f"  Status: {snapshot.status_label}")
    print(f"  Display: {snapshot.display_text}")
    if snapshot.work_info:
        print(f"  {snapshot.work_info}")
    if snapshot.is_running:
        print(f"  Button: {snapshot.stop_label}")
    print()


async def main():
    """Main demonstration function."""
    print("🚀 Break Timer - Basic Usage Demo")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as temp_dir:
        db_path = str(Path(temp_dir) / "demo.db")
        config = ConfigLoader.create().load({
            "storage": {"db_path": db_path},
            "logging": {"level": "WARNING"},
        })
        configure_logging(**asdict(config.logging))
        clock = SimulatedClock(now_ms())

        print("1. Initializing the engine...")
        engine = TimerEngine.from_config(config, clock=clock, autotick=False)
        print_snapshot("After load", await engine.load())

        print("2. Configuring a 25 minute work duration...")
        engine.set_work_duration("25")
        print(f"   Rejected '0': {not engine.set_work_duration('0')}")
        print()

        print("3. Starting a session...")
        engine.start()
        clock.advance(MS_PER_SECOND)
        engine.tick()
        print_snapshot("One second in", engine.snapshot())

        clock.advance(25 * MS_PER_MINUTE)
        engine.tick()
        print_snapshot("Break due", engine.snapshot())
        await engine.close()

        print("4. Simulating a restart 15 minutes later...")
        clock.advance(15 * MS_PER_MINUTE)
        restarted = TimerEngine.from_config(config, clock=clock, autotick=False)
        async with restarted:
            print_snapshot("After resume", restarted.snapshot())
            restarted.stop()
            print_snapshot("After stop", restarted.snapshot())

    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
