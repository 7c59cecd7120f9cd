"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Deals a game (creates a session)
2. Plays cards and draws until the deal is won or lost
3. Receives the reward fragment for the finished deal
4. Reads progress and crafts artifacts

Sessions are in memory; player progress is persisted by the ProgressStore.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    PlayCardRequest,
    CraftRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    MoveResponse,
    ProgressResponse,
    ArtifactProgressResponse,
    CraftResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    FragmentInfo,
    ArtifactInfo,
    ArtifactProgressInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "PlayCardRequest",
    "CraftRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "MoveResponse",
    "ProgressResponse",
    "ArtifactProgressResponse",
    "CraftResponse",
    "ErrorResponse",
    # Shared
    "CardInfo",
    "FragmentInfo",
    "ArtifactInfo",
    "ArtifactProgressInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
