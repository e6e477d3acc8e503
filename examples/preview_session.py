"""
Run a shortened breathing session in the terminal.

Uses the real event-loop ticker and prints the countdown and the events a UI
would receive. Handy for checking the flow without a client app.

    python examples/preview_session.py --exercise bee --duration 12
"""

import argparse
import asyncio
import logging
from typing import Optional

from breathing_coach.domain.entities import QuotaWriteFailedEvent, SessionCompletedEvent
from breathing_coach.domain.errors import BreathingCoachError
from breathing_coach.domain.services import QuotaStore, SessionController
from breathing_coach.infrastructure import (
    AsyncioTicker,
    FileKeyValueStore,
    LocalExerciseProvider,
    LocalKeyValueStore,
    SystemClock,
)


async def preview(exercise_id: str, duration: int, state_file: Optional[str]) -> None:
    clock = SystemClock()
    storage = FileKeyValueStore(state_file) if state_file else LocalKeyValueStore()
    controller = SessionController(
        exercise_provider=LocalExerciseProvider(),
        quota_store=QuotaStore(storage, clock),
        ticker=AsyncioTicker(),
        clock=clock,
        duration_seconds=duration,
    )

    events = controller.subscribe()
    try:
        await controller.start(exercise_id)
    except BreathingCoachError as e:
        print(f"Cannot start: {e}")
        controller.unsubscribe(events)
        return

    while True:
        view = controller.current_view()
        print(f"{view.remaining_formatted:>6}  {view.phase or '':<7} {view.completed_count}/{view.goal}")
        try:
            event = await asyncio.wait_for(events.get(), timeout=1.0)
        except asyncio.TimeoutError:
            continue
        print(f"event: {event}")
        if isinstance(event, (SessionCompletedEvent, QuotaWriteFailedEvent)):
            break

    controller.unsubscribe(events)
    controller.stop()


def main() -> None:
    parser = argparse.ArgumentParser(description="Preview a breathing session")
    parser.add_argument("--exercise", default="flower", help="Exercise id (flower, candle, bee)")
    parser.add_argument("--duration", type=int, default=10, help="Session length in seconds")
    parser.add_argument("--state-file", default=None, help="JSON file keeping the daily quota")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    asyncio.run(preview(args.exercise, args.duration, args.state_file))


if __name__ == "__main__":
    main()
