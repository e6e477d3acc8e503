"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, WebSocket, status
from fastapi.middleware.cors import CORSMiddleware

from ..domain.entities import SessionStart
from ..domain.errors import (
    BreathingCoachError,
    QuotaExceeded,
    SessionInProgress,
    StorageError,
    UnknownExercise,
)
from .config import settings
from .controller import BreathingCoachController

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

HTTP_STATUS_CODES = {
    UnknownExercise: status.HTTP_404_NOT_FOUND,
    SessionInProgress: status.HTTP_409_CONFLICT,
    QuotaExceeded: status.HTTP_429_TOO_MANY_REQUESTS,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _to_http_error(error: BreathingCoachError) -> HTTPException:
    status_code = HTTP_STATUS_CODES.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(status_code=status_code, detail=str(error))


def create_app(controller: BreathingCoachController) -> FastAPI:
    """Create the FastAPI app around a wired controller.

    Args:
        controller: The breathing coach controller serving every endpoint.

    Returns:
        FastAPI: The configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await controller.startup()
        yield
        controller.shutdown()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    session_controller = controller.session_controller

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return controller.get_health_status()

    @app.get("/exercises")
    async def get_exercises():
        """List the available breathing exercises."""
        return {"exercises": [exercise.model_dump() for exercise in controller.list_exercises()]}

    @app.get("/session")
    async def get_session():
        """Current session view."""
        return session_controller.current_view().model_dump(mode="json")

    @app.post("/session/start")
    async def start_session(request: SessionStart):
        """Start a breathing session.

        Returns:
            The view of the running session.
        """
        try:
            view = await session_controller.start(request.exercise_id)
        except BreathingCoachError as e:
            logger.warning(f"Start of {request.exercise_id} refused: {e}")
            raise _to_http_error(e)
        return view.model_dump(mode="json")

    @app.post("/session/stop")
    async def stop_session():
        """Stop the current session and return to idle."""
        return session_controller.stop().model_dump(mode="json")

    @app.post("/session/abort")
    async def abort_session():
        """Abandon the running session."""
        return session_controller.abort().model_dump(mode="json")

    @app.post("/quota/retry")
    async def retry_quota():
        """Retry persisting a completed session whose quota write failed."""
        try:
            quota = await session_controller.retry_quota_write()
        except BreathingCoachError as e:
            raise _to_http_error(e)
        return {
            "quota": quota.model_dump() if quota is not None else None,
            "pending_quota_writes": session_controller.pending_increments,
        }

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """
        WebSocket endpoint streaming the session to a UI client.

        Connection lifecycle:
        1. Client connects
        2. Server pushes session.view snapshots and session events
        3. Client sends session.start / session.stop / session.view messages
        4. On disconnect, a running session is aborted
        """
        await websocket.accept()
        try:
            await controller.handle_websocket_connection(websocket)
        except Exception as e:
            logger.error(f"Error handling websocket connection: {e}", exc_info=True)

    return app


app = create_app(BreathingCoachController.from_settings(settings))
