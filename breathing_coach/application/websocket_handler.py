import asyncio
import json
import logging

from pydantic import BaseModel, ValidationError
from starlette.websockets import WebSocket, WebSocketDisconnect

from ..domain.entities import (
    ErrorCode,
    ErrorMessage,
    QuotaExhausted,
    QuotaExhaustedEvent,
    QuotaWriteFailed,
    QuotaWriteFailedEvent,
    SessionAborted,
    SessionAbortedEvent,
    SessionCompleted,
    SessionCompletedEvent,
    SessionEvent,
    SessionStart,
    SessionStarted,
    SessionStartedEvent,
    SessionStatus,
    SessionViewMessage,
)
from ..domain.errors import (
    BreathingCoachError,
    QuotaExceeded,
    SessionInProgress,
    StorageError,
    UnknownExercise,
)
from ..domain.services import SessionController

logger = logging.getLogger(__name__)

ERROR_CODES = {
    UnknownExercise: ErrorCode.UNKNOWN_EXERCISE,
    SessionInProgress: ErrorCode.SESSION_IN_PROGRESS,
    QuotaExceeded: ErrorCode.QUOTA_EXCEEDED,
    StorageError: ErrorCode.STORAGE_UNAVAILABLE,
}


def event_to_message(event: SessionEvent) -> BaseModel:
    """Convert a controller event to its WebSocket message."""
    match event:
        case SessionStartedEvent():
            return SessionStarted(exercise_id=event.exercise_id, duration_total=event.duration_total)
        case SessionCompletedEvent():
            return SessionCompleted(
                exercise_id=event.exercise_id,
                completed_count=event.completed_count,
                goal=event.goal,
                message=event.message,
            )
        case SessionAbortedEvent():
            return SessionAborted(exercise_id=event.exercise_id, remaining=event.remaining)
        case QuotaExhaustedEvent():
            return QuotaExhausted(
                completed_count=event.completed_count,
                goal=event.goal,
                message=event.message,
            )
        case QuotaWriteFailedEvent():
            return QuotaWriteFailed(exercise_id=event.exercise_id, error=event.error)
        case _:
            raise ValueError(f"Unknown SessionEvent type: {type(event)}")


class WebSocketHandler:
    """Bridges one WebSocket client to the session controller.

    Each connection subscribes its own event queue, so every connected
    client sees every controller event emitted while it is connected.
    Between events a view snapshot is pushed every ``view_push_interval``
    seconds so the client can render the countdown.
    """

    def __init__(self, session_controller: SessionController, view_push_interval: float = 1.0):
        self._controller = session_controller
        self._view_push_interval = view_push_interval
        self._send_lock = asyncio.Lock()
        self._closed = False

    async def handle_websocket(self, websocket: WebSocket) -> None:
        # Note: websocket.accept() is called by the API endpoint before this
        self._closed = False
        events = self._controller.subscribe()
        send_task = asyncio.create_task(self._send_loop(websocket, events))
        receive_task = asyncio.create_task(self._receive_loop(websocket))
        done, pending = await asyncio.wait(
            {send_task, receive_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
        try:
            for task in done:
                exc = task.exception()
                if exc:
                    raise exc
        except WebSocketDisconnect:
            logger.info(f"WebSocket disconnected: {websocket.client}")
        except Exception as e:
            logger.error(f"WebSocket error: {e}", exc_info=True)
        finally:
            # Both loops must be finished before abort() emits its event
            self._closed = True
            for t in (send_task, receive_task):
                if not t.done():
                    t.cancel()
            await asyncio.gather(send_task, receive_task, return_exceptions=True)
            self._controller.unsubscribe(events)

            if self._controller.status == SessionStatus.RUNNING:
                self._controller.abort()

            try:
                await websocket.close()
            except Exception as e:
                logger.debug(f"WebSocket already closed: {e}")
            logger.info(f"WebSocket connection closed: {websocket.client}")

    async def _send_loop(self, websocket: WebSocket, events: asyncio.Queue) -> None:
        while not self._closed:
            try:
                event = await asyncio.wait_for(events.get(), timeout=self._view_push_interval)
            except asyncio.TimeoutError:
                await self._send_view(websocket)
                continue
            await self._send(websocket, event_to_message(event))

    async def _receive_loop(self, websocket: WebSocket) -> None:
        """Receive messages from client and forward to the session controller."""
        while True:
            data = await websocket.receive()

            if data.get("type") == "websocket.disconnect":
                logger.info("Client disconnected")
                break

            if data.get("type") == "websocket.receive" and data.get("text") is not None:
                try:
                    message = json.loads(data["text"])
                except json.JSONDecodeError as e:
                    logger.error(f"Invalid JSON message: {e}")
                    await self._send_error(websocket, ErrorCode.INVALID_MESSAGE, "Message is not valid JSON")
                    continue
                await self._handle_control_message(websocket, message)
            else:
                logger.warning(f"Ignoring unsupported frame: {list(data.keys())}")

    async def _handle_control_message(self, websocket: WebSocket, message: dict) -> None:
        """Handle JSON control messages from client."""
        msg_type = message.get("type") if isinstance(message, dict) else None

        if msg_type == "session.start":
            try:
                request = SessionStart.model_validate(message)
            except ValidationError as e:
                await self._send_error(websocket, ErrorCode.INVALID_MESSAGE, str(e))
                return
            try:
                await self._controller.start(request.exercise_id)
            except BreathingCoachError as e:
                await self._send_error(websocket, ERROR_CODES.get(type(e), ErrorCode.INTERNAL_ERROR), str(e))

        elif msg_type == "session.stop":
            self._controller.stop()
            await self._send_view(websocket)

        elif msg_type == "session.view":
            await self._send_view(websocket)

        else:
            logger.warning(f"Unknown control message type: {msg_type}")
            await self._send_error(websocket, ErrorCode.INVALID_MESSAGE, f"Unknown message type: {msg_type}")

    async def _send_view(self, websocket: WebSocket) -> None:
        await self._send(websocket, SessionViewMessage(view=self._controller.current_view()))

    async def _send_error(self, websocket: WebSocket, code: ErrorCode, text: str) -> None:
        await self._send(websocket, ErrorMessage(code=code, message=text))

    async def _send(self, websocket: WebSocket, message: BaseModel) -> None:
        async with self._send_lock:
            await websocket.send_text(message.model_dump_json())
