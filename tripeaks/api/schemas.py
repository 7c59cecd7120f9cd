"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- GAME_OVER: The deal is already won or lost
- CARD_NOT_FOUND: No tableau card with the given id
- CARD_NOT_PLAYABLE: The card is still covered
- ILLEGAL_MOVE: The card does not match the waste top
- INSUFFICIENT_FRAGMENTS: Not enough fragments to craft
- ARTIFACT_ALREADY_CRAFTED: The artifact for that rarity is owned
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


class RarityName(str, Enum):
    """Fragment and artifact rarities."""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    GAME_OVER = "GAME_OVER"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    CARD_NOT_PLAYABLE = "CARD_NOT_PLAYABLE"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    INSUFFICIENT_FRAGMENTS = "INSUFFICIENT_FRAGMENTS"
    ARTIFACT_ALREADY_CRAFTED = "ARTIFACT_ALREADY_CRAFTED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display. Face-down cards hide suit and rank."""
    card_id: Optional[str] = None
    suit: Optional[str] = None
    rank: Optional[str] = None
    face_up: bool
    row: Optional[int] = None
    col: Optional[int] = None
    playable: bool = False


class FragmentInfo(BaseModel):
    """A collected fragment."""
    fragment_id: str
    rarity: RarityName
    name: str
    description: str = ""
    icon: str = ""


class ArtifactInfo(BaseModel):
    """A crafted (or craftable) artifact."""
    artifact_id: str
    name: str
    description: str = ""
    rarity: RarityName
    icon: str = ""
    effect: str = ""
    color: str = Field(..., description="Display color for the rarity")
    required_fragments: int
    current_fragments: int
    completed: bool


class ArtifactProgressInfo(BaseModel):
    """Fragment counts toward the artifact of one rarity."""
    rarity: RarityName
    artifact_id: str
    artifact_name: str
    current: int
    required: int
    ready: bool
    crafted: bool


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to deal a new game."""
    seed: Optional[int] = Field(None, description="Seed for a reproducible deal")


class PlayCardRequest(BaseModel):
    """Request to play a tableau card onto the waste."""
    card_id: str = Field(..., description="ID of an uncovered tableau card")


class CraftRequest(BaseModel):
    """Request to craft the artifact of a rarity."""
    rarity: RarityName


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Snapshot of one deal."""
    tableau: list[list[CardInfo]] = Field(default_factory=list)
    waste_top: Optional[CardInfo] = None
    waste_count: int = 0
    stock_count: int = 0
    score: int = 0
    moves: int = 0
    streak: int = 0
    phase: str
    cards_remaining: int = 0
    playable_card_ids: list[str] = Field(default_factory=list)
    can_draw: bool = False


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    seed: Optional[int] = None
    created_at: float = 0.0
    game_state: GameStateResponse
    reward: Optional[FragmentInfo] = None
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """Result of a play or draw."""
    session_id: str
    success: bool
    status: SessionStatus
    changes: list[str] = Field(default_factory=list)
    game_state: GameStateResponse
    reward: Optional[FragmentInfo] = Field(
        None, description="Fragment rolled on the move that finished the deal"
    )
    progress_saved: Optional[bool] = None
    api_version: str = "v1"


class ProgressResponse(BaseModel):
    """The player's lifetime progress."""
    games_played: int = 0
    games_won: int = 0
    total_score: int = 0
    current_streak: int = 0
    best_streak: int = 0
    fragments: list[FragmentInfo] = Field(default_factory=list)
    artifacts: list[ArtifactInfo] = Field(default_factory=list)
    api_version: str = "v1"


class ArtifactProgressResponse(BaseModel):
    """Progress toward every artifact."""
    progress: list[ArtifactProgressInfo] = Field(default_factory=list)
    next_craftable: Optional[ArtifactInfo] = None
    api_version: str = "v1"


class CraftResponse(BaseModel):
    """Result of crafting an artifact."""
    artifact: ArtifactInfo
    progress: ProgressResponse
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """List of active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response to ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
