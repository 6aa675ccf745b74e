"""
FastAPI Application - HTTP/WebSocket adapter for Cadena matches.

Endpoints:
    POST   /api/v1/sessions                  Create a match session
    GET    /api/v1/sessions                  List active sessions
    GET    /api/v1/sessions/{id}             Get session status
    DELETE /api/v1/sessions/{id}             End session
    GET    /api/v1/sessions/{id}/state       Get the state as seen by a viewer
    POST   /api/v1/sessions/{id}/intents     Play, discard or pass
    GET    /api/v1/objectives                Objective catalog
    GET    /api/v1/rulesets                  Named rule sets
    WS     /api/v1/sessions/{id}/ws          Per-viewer state pushes

Intent Flow:
    1. POST /intents with the acting player_id
    2. Intents from anyone but the current seat get NOT_YOUR_TURN
    3. The engine applies the intent, then every computer seat acts
       until a human is up or the match ends
    4. Each WebSocket viewer receives their own projected state

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import json
import logging
import os

# Environment configuration
CADENA_ENV = os.getenv("CADENA_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
DEFAULT_RULESET = os.getenv("CADENA_DEFAULT_RULESET", "standard")
DEFAULT_DIFFICULTY = os.getenv("CADENA_DEFAULT_DIFFICULTY", "normal")
SESSION_TTL = int(os.getenv("CADENA_SESSION_TTL", "3600"))

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, WebSocket, WebSocketDisconnect, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        IntentRequest,
        # Response models
        SessionResponse,
        GameStateResponse,
        IntentResponse,
        ObjectiveListResponse,
        RuleSetListResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Cadena Engine API",
        description="""
Chain combo card game engine - authoritative matches against computer players.

## Turn Flow

1. `POST /sessions` seats the humans (ids `player-1`, `player-2`, ...) and
   the computer seats. Computer seats that open the match play immediately.
2. `POST /sessions/{id}/intents` submits `play_card`, `discard` or `pass`
   for the current seat; computer turns follow before the response.
3. `GET /sessions/{id}/state?viewer_id=...` returns that viewer's projection.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist or has ended |
| `PLAYER_NOT_FOUND` | Player is not seated in the session |
| `NOT_YOUR_TURN` | Intent from a player who is not the current seat |
| `INVALID_ACTION` | The engine rejected the intent |
| `MATCH_FINISHED` | The match already has a winner |
| `VALIDATION_ERROR` | Request parameters are invalid |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    api_service = service or APIService(
        default_ruleset=DEFAULT_RULESET,
        default_difficulty=DEFAULT_DIFFICULTY,
    )

    # WebSocket connections: session_id -> [(viewer_id, socket)]
    ws_connections: dict[str, list[tuple[Optional[str], WebSocket]]] = {}

    # =========================================================================
    # Error helpers
    # =========================================================================

    status_codes = {
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.PLAYER_NOT_FOUND: 404,
        ErrorCode.NOT_YOUR_TURN: 409,
        ErrorCode.MATCH_FINISHED: 409,
    }

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code or status_codes.get(error_code, 400),
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_to_response(error: ErrorResponse) -> JSONResponse:
        return make_error_response(error.error_code, error.error, details=error.details)

    async def broadcast_state(session_id: str):
        """Push each connected viewer their own projection of the match."""
        dead_connections = []
        for viewer_id, ws in list(ws_connections.get(session_id, [])):
            response = api_service.get_game_state(session_id, viewer_id)
            if isinstance(response, ErrorResponse):
                message = {"type": "error", "payload": response.model_dump(mode="json")}
            else:
                message = {
                    "type": "game_over" if response.winner_id else "state_update",
                    "payload": response.model_dump(mode="json"),
                }
            try:
                await ws.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                logger.debug("Dropping closed socket for %s in session %s", viewer_id, session_id)
                dead_connections.append((viewer_id, ws))
        for entry in dead_connections:
            ws_connections[session_id].remove(entry)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid seats, rule set or difficulty"}},
        tags=["Sessions"],
        summary="Create a new match session",
    )
    async def create_session(request: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new match session.

        Human seats get ids `player-1`, `player-2`, ... in the given order.
        """
        if api_service.cleanup(SESSION_TTL):
            for stale_id in [sid for sid in ws_connections if not api_service.has_session(sid)]:
                ws_connections.pop(stale_id, None)
        try:
            return api_service.create_session(request)
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current status of a match session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a match session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a match session and release resources."""
        success = api_service.end_session(session_id, reason)
        for _, ws in ws_connections.pop(session_id, []):
            try:
                await ws.close()
            except RuntimeError:
                logger.debug("Socket already closed for session %s", session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Gameplay Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Gameplay"],
        summary="Get the match as seen by one player",
    )
    async def get_game_state(
        session_id: str,
        viewer_id: Annotated[Optional[str], Query(description="Viewing player; omit for spectators")] = None,
    ) -> Union[GameStateResponse, JSONResponse]:
        """Other players' hands and objectives are hidden."""
        response = api_service.get_game_state(session_id, viewer_id)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/intents",
        response_model=IntentResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Intent rejected by the engine"},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Not your turn or match finished"},
        },
        tags=["Gameplay"],
        summary="Play a card, discard or pass",
    )
    async def submit_intent(
        session_id: str,
        request: IntentRequest,
    ) -> Union[IntentResponse, JSONResponse]:
        """
        Apply an intent for the current seat, then run computer turns.
        """
        response = api_service.submit_intent(session_id, request)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)

        await broadcast_state(session_id)
        return response

    @app.get(
        "/api/v1/objectives",
        response_model=ObjectiveListResponse,
        tags=["Catalog"],
        summary="List every objective",
    )
    async def list_objectives() -> ObjectiveListResponse:
        return api_service.list_objectives()

    @app.get(
        "/api/v1/rulesets",
        response_model=RuleSetListResponse,
        tags=["Catalog"],
        summary="List the named rule sets",
    )
    async def list_rulesets() -> RuleSetListResponse:
        return api_service.list_rulesets()

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(
        websocket: WebSocket,
        session_id: str,
        viewer_id: Optional[str] = None,
    ):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game state changed (projected for this viewer)
        - game_over: The match has a winner
        - error: Error occurred

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        entry = (viewer_id, websocket)
        ws_connections.setdefault(session_id, []).append(entry)

        try:
            # Send initial state
            response = api_service.get_game_state(session_id, viewer_id)
            if isinstance(response, ErrorResponse):
                await websocket.send_json({
                    "type": "error",
                    "payload": response.model_dump(mode="json"),
                })
            else:
                await websocket.send_json({
                    "type": "state_update",
                    "payload": response.model_dump(mode="json"),
                })

            # Listen for messages
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                    if message.get("type") == "ping":
                        await websocket.send_json({"type": "pong"})
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })

        except WebSocketDisconnect:
            logger.debug("Viewer %s disconnected from session %s", viewer_id, session_id)
        finally:
            if entry in ws_connections.get(session_id, []):
                ws_connections[session_id].remove(entry)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="cadena-engine",
            version=__version__,
            active_sessions=len(api_service.list_sessions()),
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Cadena Engine API",
            "version": __version__,
            "environment": CADENA_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn cadena.api.app:app
app = create_app()
