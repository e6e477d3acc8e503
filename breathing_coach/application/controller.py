"""Breathing Coach Controller for wiring and coordinating the core."""

import logging
from typing import Optional

from fastapi import WebSocket

from ..domain.entities import Exercise
from ..domain.errors import StorageError
from ..domain.interfaces.clock import Clock, Ticker
from ..domain.interfaces.exercise_provider import ExerciseProvider
from ..domain.interfaces.key_value_store import KeyValueStore
from ..domain.services import QuotaStore, SessionController
from ..infrastructure.asyncio_ticker import AsyncioTicker
from ..infrastructure.dynamodb_key_value_store import DynamoDBKeyValueStore
from ..infrastructure.file_key_value_store import FileKeyValueStore
from ..infrastructure.local_exercise_provider import LocalExerciseProvider
from ..infrastructure.local_key_value_store import LocalKeyValueStore
from ..infrastructure.system_clock import SystemClock
from .config import Settings
from .websocket_handler import WebSocketHandler

logger = logging.getLogger(__name__)


def build_key_value_store(settings: Settings) -> KeyValueStore:
    """Create the quota persistence backend selected in settings."""
    if settings.storage_backend == "dynamodb":
        return DynamoDBKeyValueStore(
            table_name=settings.quota_table_name,
            region_name=settings.aws_region,
        )
    if settings.storage_backend == "file":
        return FileKeyValueStore(settings.storage_file_path)
    return LocalKeyValueStore()


class BreathingCoachController:
    """
    Controller for coordinating breathing coach operations.

    This controller is injected with the session controller and the exercise
    catalog and handles the glue for each endpoint, keeping the API layer thin.
    """

    def __init__(
        self,
        session_controller: SessionController,
        exercise_provider: ExerciseProvider,
        storage: KeyValueStore,
        view_push_interval: float = 1.0,
    ):
        """
        Initialize the controller with injected dependencies.

        Args:
            session_controller: The core session state machine
            exercise_provider: Catalog of exercises
            storage: Quota persistence backend, reported by the health check
            view_push_interval: Seconds between view snapshots on the WebSocket
        """
        self.session_controller = session_controller
        self.exercise_provider = exercise_provider
        self.storage = storage
        self.view_push_interval = view_push_interval

        logger.info("BreathingCoachController initialized with providers")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        storage: Optional[KeyValueStore] = None,
        ticker: Optional[Ticker] = None,
        clock: Optional[Clock] = None,
    ) -> "BreathingCoachController":
        """
        Build a fully wired controller.

        Args:
            settings: Application settings
            storage: Overrides the backend selected in settings
            ticker: Overrides the event-loop ticker
            clock: Overrides the system clock
        """
        clock = clock or SystemClock()
        storage = storage or build_key_value_store(settings)
        exercise_provider = LocalExerciseProvider()
        quota_store = QuotaStore(
            storage=storage,
            clock=clock,
            goal=settings.daily_goal,
            date_key=settings.quota_date_key,
            count_key=settings.quota_count_key,
        )
        session_controller = SessionController(
            exercise_provider=exercise_provider,
            quota_store=quota_store,
            ticker=ticker or AsyncioTicker(),
            clock=clock,
            duration_seconds=settings.session_duration_seconds,
            tick_interval_seconds=settings.tick_interval_seconds,
        )
        return cls(
            session_controller=session_controller,
            exercise_provider=exercise_provider,
            storage=storage,
            view_push_interval=settings.view_push_interval_seconds,
        )

    async def startup(self) -> None:
        """Load today's quota; storage failures leave the quota unknown."""
        try:
            quota = await self.session_controller.initialize()
            logger.info(f"Loaded quota {quota.completed_count}/{quota.goal} for {quota.date}")
        except StorageError as e:
            logger.error(f"Quota unavailable at startup, sessions blocked until storage recovers: {e}")

    def shutdown(self) -> None:
        """Abandon a running session so no tick outlives the application."""
        self.session_controller.abort()

    async def handle_websocket_connection(self, websocket: WebSocket) -> None:
        logger.info(f"Handling new WebSocket connection from {websocket.client}")
        handler = WebSocketHandler(
            session_controller=self.session_controller,
            view_push_interval=self.view_push_interval,
        )
        await handler.handle_websocket(websocket)

    def list_exercises(self) -> list[Exercise]:
        return self.exercise_provider.list_exercises()

    def get_health_status(self) -> dict:
        """
        Get application health status.

        Returns:
            Dict containing health status information
        """
        quota = self.session_controller.quota_store.quota
        return {
            "status": "healthy" if quota is not None else "degraded",
            "session_status": self.session_controller.status.value,
            "quota_known": quota is not None,
            "pending_quota_writes": self.session_controller.pending_increments,
            "providers": {
                "exercise_provider": type(self.exercise_provider).__name__,
                "storage": type(self.storage).__name__,
                "ticker": type(self.session_controller.ticker).__name__,
            },
        }
