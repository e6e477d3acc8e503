"""Session controller driving the breathing exercise lifecycle."""

import asyncio
import logging
from typing import Optional

from ..entities.breathing_session import BreathingSession, SessionStatus
from ..entities.daily_quota import DailyQuota
from ..entities.events import (
    QuotaExhaustedEvent,
    QuotaWriteFailedEvent,
    SessionAbortedEvent,
    SessionCompletedEvent,
    SessionEvent,
    SessionStartedEvent,
)
from ..entities.exercise import Exercise
from ..entities.session_view import SessionView, format_remaining
from ..errors import QuotaExceeded, SessionInProgress, StorageError
from ..interfaces.clock import CancellationHandle, Clock, Ticker
from ..interfaces.exercise_provider import ExerciseProvider
from .quota_store import QuotaStore

logger = logging.getLogger(__name__)

DEFAULT_SESSION_DURATION = 180  # 3 minutes in seconds


def completion_message(completed_count: Optional[int], goal: int) -> str:
    """Message shown to the user when a session finishes."""
    if completed_count is None:
        return "Great job! Your session is complete, but today's progress could not be saved."
    if completed_count >= goal:
        return f"Congratulations! You've completed all {goal} meditation sessions today. Great work!"
    return f"Great job! You've completed {completed_count} of {goal} sessions today."


def quota_reached_message(goal: int) -> str:
    """Message shown when a start is refused because the goal is reached."""
    return (
        f"You've already completed your {goal} meditation sessions today. "
        "Great work! Come back tomorrow for more."
    )


class SessionController:
    """
    State machine for one breathing session at a time.

    States are Idle, Running, Completed and Aborted. The controller owns the
    current session, consumes ticks from the Ticker, consults and updates the
    QuotaStore, and fans events out to every queue handed out by ``subscribe``.
    Events emitted while nobody is subscribed are dropped.

    All operations are expected to run on a single event loop. ``start``,
    completion and quota retries are additionally serialized by a lock so a
    pending quota read can never admit a second session.
    """

    def __init__(
        self,
        exercise_provider: ExerciseProvider,
        quota_store: QuotaStore,
        ticker: Ticker,
        clock: Clock,
        duration_seconds: int = DEFAULT_SESSION_DURATION,
        tick_interval_seconds: float = 1.0,
    ):
        """
        Initialize the controller with injected dependencies.

        Args:
            exercise_provider: Catalog used to resolve exercise ids
            quota_store: Persisted daily quota
            ticker: Source of countdown ticks
            clock: Time source for session timestamps
            duration_seconds: Length of every session
            tick_interval_seconds: Seconds between ticks
        """
        if duration_seconds < 1:
            raise ValueError("duration_seconds must be at least 1")
        self.exercise_provider = exercise_provider
        self.quota_store = quota_store
        self.ticker = ticker
        self.clock = clock
        self.duration_seconds = duration_seconds
        self.tick_interval_seconds = tick_interval_seconds

        self.session: Optional[BreathingSession] = None
        self.exercise: Optional[Exercise] = None
        self._subscribers: list[asyncio.Queue[SessionEvent]] = []

        self._tick_handle: Optional[CancellationHandle] = None
        self._lock = asyncio.Lock()
        # Calendar day of each completed session whose quota write failed
        self._pending_increments: list[str] = []

        logger.info(
            f"SessionController initialized (duration={duration_seconds}s, goal={quota_store.goal})"
        )

    @property
    def status(self) -> SessionStatus:
        if self.session is None:
            return SessionStatus.IDLE
        return self.session.status

    @property
    def pending_increments(self) -> int:
        """Completed sessions whose quota write failed and was not retried."""
        return len(self._pending_increments)

    def subscribe(self) -> asyncio.Queue:
        """
        Register a new event subscriber.

        Returns:
            asyncio.Queue: Queue receiving every event emitted from now on.
        """
        queue: asyncio.Queue[SessionEvent] = asyncio.Queue()
        self._subscribers.append(queue)
        logger.debug(f"Subscriber added ({len(self._subscribers)} total)")
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        """Stop delivering events to a queue returned by ``subscribe``."""
        if queue in self._subscribers:
            self._subscribers.remove(queue)
            logger.debug(f"Subscriber removed ({len(self._subscribers)} left)")

    async def initialize(self) -> DailyQuota:
        """
        Load today's quota so the first view carries the count.

        Returns:
            DailyQuota: Today's quota.

        Raises:
            StorageError: If the quota cannot be read. The controller stays
                usable but refuses to start until storage recovers.
        """
        return await self.quota_store.load()

    async def start(self, exercise_id: str) -> SessionView:
        """
        Start a session for the given exercise.

        Args:
            exercise_id: Identifier of the exercise to run

        Returns:
            SessionView: The view right after the session started.

        Raises:
            SessionInProgress: If the controller is not idle.
            UnknownExercise: If the exercise does not exist.
            QuotaExceeded: If today's goal has been reached.
            StorageError: If the quota cannot be read.
        """
        async with self._lock:
            if self.session is not None:
                logger.warning(
                    f"Refusing to start {exercise_id}: session for "
                    f"{self.session.exercise_id} is {self.session.status.value}"
                )
                raise SessionInProgress(self.session.exercise_id)

            exercise = self.exercise_provider.get_exercise(exercise_id)

            quota = await self.quota_store.load()
            if quota.exhausted:
                logger.info(f"Refusing to start {exercise_id}: daily goal of {quota.goal} reached")
                self._emit(
                    QuotaExhaustedEvent(
                        completed_count=quota.completed_count,
                        goal=quota.goal,
                        message=quota_reached_message(quota.goal),
                    )
                )
                raise QuotaExceeded(quota.completed_count, quota.goal)

            if self._tick_handle is not None:
                raise RuntimeError("A tick subscription is still outstanding")

            self.exercise = exercise
            self.session = BreathingSession(
                exercise_id=exercise.id,
                duration_total=self.duration_seconds,
                remaining=self.duration_seconds,
                status=SessionStatus.RUNNING,
                started_at=self.clock.now(),
            )
            self._tick_handle = self.ticker.schedule(self.tick_interval_seconds, self.tick)

            self._emit(SessionStartedEvent(exercise_id=exercise.id, duration_total=self.duration_seconds))
            logger.info(f"Session started for {exercise.id} ({quota.completed_count}/{quota.goal} done today)")
            return self.current_view()

    async def tick(self) -> None:
        """
        Count down one second of the running session.

        Ticks arriving when no session is running are discarded. When the
        countdown reaches zero the session completes and the quota is
        incremented exactly once.

        Raises:
            StorageError: If the completed session could not be counted.
        """
        session = self.session
        if session is None or session.status != SessionStatus.RUNNING:
            logger.debug("Discarding tick, no running session")
            return

        session.remaining = max(session.remaining - 1, 0)
        if session.remaining == 0:
            await self._complete(session)

    def stop(self) -> SessionView:
        """
        Stop the current session and return to idle.

        Partial sessions never count toward the quota.

        Returns:
            SessionView: The idle view.
        """
        if self.session is None:
            logger.warning("stop() called while idle, ignoring")
            return self.current_view()

        self._cancel_ticks()
        logger.info(f"Session for {self.session.exercise_id} stopped ({self.session.status.value})")
        self.session = None
        self.exercise = None
        return self.current_view()

    def abort(self) -> SessionView:
        """
        Abandon the running session, keeping its remaining time for display.

        Returns:
            SessionView: The aborted view.
        """
        session = self.session
        if session is None or session.status != SessionStatus.RUNNING:
            logger.warning(f"abort() called while {self.status.value}, ignoring")
            return self.current_view()

        self._cancel_ticks()
        session.status = SessionStatus.ABORTED
        self._emit(SessionAbortedEvent(exercise_id=session.exercise_id, remaining=session.remaining))
        logger.info(f"Session for {session.exercise_id} aborted with {session.remaining}s remaining")
        return self.current_view()

    async def retry_quota_write(self) -> Optional[DailyQuota]:
        """
        Retry counting a completed session whose quota write failed.

        Failed writes from an earlier calendar day are discarded so they are
        never charged to today.

        Returns:
            Optional[DailyQuota]: The persisted quota, or the last known one if
            nothing was pending.

        Raises:
            StorageError: If storage is still unavailable.
        """
        async with self._lock:
            if not self._pending_increments:
                return self.quota_store.quota

            today = self.quota_store.today()
            stale = [day for day in self._pending_increments if day != today]
            if stale:
                logger.warning(
                    f"Discarding {len(stale)} quota write(s) from a previous day: {', '.join(stale)}"
                )
                self._pending_increments = [day for day in self._pending_increments if day == today]
            if not self._pending_increments:
                return await self.quota_store.load()

            if self.quota_store.quota is None:
                await self.quota_store.load()
            quota = await self.quota_store.increment()
            self._pending_increments.pop()
            logger.info(f"Quota write retried, {len(self._pending_increments)} still pending")

            if quota.exhausted:
                self._emit(
                    QuotaExhaustedEvent(
                        completed_count=quota.completed_count,
                        goal=quota.goal,
                        message=completion_message(quota.completed_count, quota.goal),
                    )
                )
            return quota

    def current_view(self) -> SessionView:
        """Return a snapshot of the controller state for the UI."""
        session = self.session
        goal = self.quota_store.goal

        completed_count = None
        quota = self.quota_store.quota
        if quota is not None:
            # A record from a previous day reads as a fresh day until reloaded.
            completed_count = quota.completed_count if quota.date == self.quota_store.today() else 0

        if session is None:
            return SessionView(
                status=SessionStatus.IDLE,
                remaining_seconds=self.duration_seconds,
                remaining_formatted=format_remaining(self.duration_seconds),
                completed_count=completed_count,
                goal=goal,
            )

        phase = None
        if session.status == SessionStatus.RUNNING and self.exercise is not None:
            phase = self.exercise.pattern.phase_at(session.elapsed)

        return SessionView(
            status=session.status,
            remaining_seconds=session.remaining,
            remaining_formatted=format_remaining(session.remaining),
            exercise_id=session.exercise_id,
            exercise=self.exercise,
            completed_count=completed_count,
            goal=goal,
            phase=phase,
        )

    # ===== Internal helpers =====

    async def _complete(self, session: BreathingSession) -> None:
        session.status = SessionStatus.COMPLETED
        self._cancel_ticks()
        logger.info(f"Session for {session.exercise_id} completed")

        async with self._lock:
            try:
                quota = await self.quota_store.increment()
            except StorageError as e:
                self._pending_increments.append(self.quota_store.today())
                self._emit(
                    SessionCompletedEvent(
                        exercise_id=session.exercise_id,
                        completed_count=None,
                        goal=self.quota_store.goal,
                        message=completion_message(None, self.quota_store.goal),
                    )
                )
                self._emit(QuotaWriteFailedEvent(exercise_id=session.exercise_id, error=str(e)))
                raise

        self._emit(
            SessionCompletedEvent(
                exercise_id=session.exercise_id,
                completed_count=quota.completed_count,
                goal=quota.goal,
                message=completion_message(quota.completed_count, quota.goal),
            )
        )
        if quota.exhausted:
            self._emit(
                QuotaExhaustedEvent(
                    completed_count=quota.completed_count,
                    goal=quota.goal,
                    message=completion_message(quota.completed_count, quota.goal),
                )
            )

    def _cancel_ticks(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _emit(self, event: SessionEvent) -> None:
        if not self._subscribers:
            logger.debug(f"Dropped {type(event).__name__}, no subscribers")
            return
        for queue in self._subscribers:
            queue.put_nowait(event)
        logger.debug(f"Emitted {type(event).__name__} to {len(self._subscribers)} subscriber(s)")
