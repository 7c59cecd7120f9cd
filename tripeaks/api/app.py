"""
FastAPI Application - REST API for TriPeaks clients.

Endpoints:
    POST   /api/v1/sessions                 Deal a new game
    GET    /api/v1/sessions                 List active sessions
    GET    /api/v1/sessions/{id}            Get session and deal state
    DELETE /api/v1/sessions/{id}            End session
    POST   /api/v1/sessions/{id}/play       Play a tableau card
    POST   /api/v1/sessions/{id}/draw       Draw from the stock
    GET    /api/v1/progress                 Player progress
    GET    /api/v1/progress/artifacts       Progress toward each artifact
    POST   /api/v1/progress/craft           Craft an artifact

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import os

# Environment configuration
TRIPEAKS_ENV = os.getenv("TRIPEAKS_ENV", "development")
TRIPEAKS_DATA_DIR = os.getenv("TRIPEAKS_DATA_DIR", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

# Status codes per error
ERROR_STATUS = {
    "SESSION_NOT_FOUND": 404,
    "VALIDATION_ERROR": 422,
    "INTERNAL_ERROR": 500,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Body, Query
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from ..session import SessionManager
    from ..storage import ProgressStore
    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        PlayCardRequest,
        CraftRequest,
        # Response models
        SessionResponse,
        MoveResponse,
        ProgressResponse,
        ArtifactProgressResponse,
        CraftResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="TriPeaks Engine API",
        description="""
TriPeaks solitaire with fragment rewards and artifact crafting.

## Game Flow

1. `POST /sessions` deals a game
2. `POST /sessions/{id}/play` and `POST /sessions/{id}/draw` until the deal
   is won or lost
3. The move that ends the deal returns the rolled `reward` fragment
4. `POST /progress/craft` turns enough fragments into an artifact

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `GAME_OVER` | The deal is already finished |
| `CARD_NOT_FOUND` | No tableau card with that id |
| `CARD_NOT_PLAYABLE` | The card is covered or face down |
| `ILLEGAL_MOVE` | The card does not match the waste top |
| `INSUFFICIENT_FRAGMENTS` | Not enough fragments to craft |
| `ARTIFACT_ALREADY_CRAFTED` | The artifact is already owned |
| `VALIDATION_ERROR` | The request body failed validation |
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
    if service is None:
        store = ProgressStore(TRIPEAKS_DATA_DIR)
        service = APIService(session_manager=SessionManager(store=store))
    api_service = service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_from(response: ErrorResponse) -> JSONResponse:
        return make_error_response(
            response.error_code,
            response.error,
            status_code=ERROR_STATUS.get(response.error_code.value, 400),
            details=response.details,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"]}
            for error in exc.errors()
        ]
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            status_code=ERROR_STATUS["VALIDATION_ERROR"],
            details={"errors": errors},
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Deal a new game",
    )
    async def create_session(
        request: Annotated[Optional[CreateSessionRequest], Body()] = None,
    ) -> SessionResponse:
        """
        Shuffle and deal a new game.

        Pass a `seed` for a reproducible deal.
        """
        return api_service.create_session(request)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
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
        """Get the session and its current deal."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and release it."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Move Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/play",
        response_model=MoveResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Move rejected"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game Loop"],
        summary="Play a tableau card onto the waste",
    )
    async def play_card(
        session_id: str,
        request: PlayCardRequest,
    ) -> Union[MoveResponse, JSONResponse]:
        """
        Play an uncovered card that is one rank away from the waste top.

        Aces and Kings wrap. The move that finishes the deal carries the
        reward fragment.
        """
        response = api_service.play_card(session_id, request.card_id)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/draw",
        response_model=MoveResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Deal already finished"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game Loop"],
        summary="Draw the next stock card",
    )
    async def draw(session_id: str) -> Union[MoveResponse, JSONResponse]:
        """Turn the next stock card onto the waste. Resets the streak."""
        response = api_service.draw(session_id)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    # =========================================================================
    # Progress Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/progress",
        response_model=ProgressResponse,
        tags=["Progress"],
        summary="Get player progress",
    )
    async def get_progress() -> ProgressResponse:
        """Lifetime counters, fragment inventory and crafted artifacts."""
        return api_service.get_progress()

    @app.get(
        "/api/v1/progress/artifacts",
        response_model=ArtifactProgressResponse,
        tags=["Progress"],
        summary="Get progress toward each artifact",
    )
    async def get_artifact_progress() -> ArtifactProgressResponse:
        """Fragment counts per rarity and the next artifact ready to craft."""
        return api_service.get_artifact_progress()

    @app.post(
        "/api/v1/progress/craft",
        response_model=CraftResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Progress"],
        summary="Craft an artifact",
    )
    async def craft(request: CraftRequest) -> Union[CraftResponse, JSONResponse]:
        """Consume fragments of one rarity to craft its artifact."""
        response = api_service.craft(request)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            service="tripeaks-engine",
            version=__version__,
            environment=TRIPEAKS_ENV,
        )

    return app


# For running directly: uvicorn tripeaks.api.app:app
app = create_app()
