"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions and their game loops
3. Exposes player progress and crafting
4. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    CraftRequest,
    # Responses
    ArtifactProgressResponse,
    CraftResponse,
    ErrorResponse,
    GameStateResponse,
    MoveResponse,
    ProgressResponse,
    SessionResponse,
    # Shared
    ArtifactInfo,
    ArtifactProgressInfo,
    CardInfo,
    FragmentInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..engine_core.action import ErrorCode as EngineErrorCode
from ..engine_core.action_generator import legal_actions
from ..engine_core.state import Card, GamePhase, GameState
from ..progression.artifacts import (
    Artifact,
    ArtifactAlreadyCraftedError,
    InsufficientFragmentsError,
    get_artifact_progress,
    get_next_craftable_artifact,
    get_rarity_color,
    get_template,
)
from ..progression.fragments import Fragment, Rarity
from ..progression.progress import PlayerProgress
from ..session import GameLoop, Session, SessionManager, TurnResult

SESSION_NOT_FOUND = "Session not found"


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Deal a game
        session_response = service.create_session(CreateSessionRequest(seed=7))

        # Play it
        move = service.play_card(session_id, "hearts-7")
        move = service.draw(session_id)

        # Spend the rewards
        service.craft(CraftRequest(rarity="common"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest | None = None) -> SessionResponse:
        """
        Deal a new game.
        """
        seed = request.seed if request else None
        session = self.session_manager.create_session(seed=seed)
        self._game_loops[session.session_id] = GameLoop(session, self.session_manager)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Get session status and the current deal.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a session.
        """
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """
        List active sessions.
        """
        return self.session_manager.list_active_sessions()

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop finished sessions older than max_age_seconds, with their loops.
        """
        removed = self.session_manager.cleanup_stale_sessions(max_age_seconds)
        for session_id in list(self._game_loops):
            self._game_loop(session_id)
        return removed

    # =========================================================================
    # Moves
    # =========================================================================

    def play_card(self, session_id: str, card_id: str) -> MoveResponse | ErrorResponse:
        """
        Play a tableau card onto the waste pile.
        """
        game_loop = self._game_loop(session_id)
        if not game_loop:
            return self._session_not_found(session_id)
        return self._turn_result_to_response(game_loop.session, game_loop.play(card_id))

    def draw(self, session_id: str) -> MoveResponse | ErrorResponse:
        """
        Draw the next stock card.
        """
        game_loop = self._game_loop(session_id)
        if not game_loop:
            return self._session_not_found(session_id)
        return self._turn_result_to_response(game_loop.session, game_loop.draw())

    # =========================================================================
    # Progress
    # =========================================================================

    def get_progress(self) -> ProgressResponse:
        """
        Get the player's lifetime progress.
        """
        return self._progress_to_response(self.session_manager.progress)

    def get_artifact_progress(self) -> ArtifactProgressResponse:
        """
        Get fragment counts toward every artifact.
        """
        progress = self.session_manager.progress
        owned = {a.artifact_id for a in progress.artifacts}

        entries = []
        for rarity, counts in get_artifact_progress(progress.fragments).items():
            template = get_template(rarity)
            entries.append(
                ArtifactProgressInfo(
                    rarity=rarity.value,
                    artifact_id=template.artifact_id,
                    artifact_name=template.name,
                    current=counts.current,
                    required=counts.required,
                    ready=counts.ready,
                    crafted=template.artifact_id in owned,
                )
            )

        next_craftable = get_next_craftable_artifact(progress.fragments, progress.artifacts)
        return ArtifactProgressResponse(
            progress=entries,
            next_craftable=self._artifact_info(next_craftable) if next_craftable else None,
        )

    def craft(self, request: CraftRequest) -> CraftResponse | ErrorResponse:
        """
        Craft the artifact of the requested rarity.
        """
        rarity = Rarity(request.rarity.value)
        try:
            artifact = self.session_manager.craft(rarity)
        except InsufficientFragmentsError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INSUFFICIENT_FRAGMENTS,
                details={"rarity": rarity.value, "current": e.current, "required": e.required},
            )
        except ArtifactAlreadyCraftedError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.ARTIFACT_ALREADY_CRAFTED,
                details={"artifact_id": e.artifact_id},
            )

        return CraftResponse(
            artifact=self._artifact_info(artifact),
            progress=self._progress_to_response(self.session_manager.progress),
        )

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _game_loop(self, session_id: str) -> GameLoop | None:
        """The loop for a live session; loops of removed sessions are pruned."""
        if self.session_manager.get_session(session_id) is None:
            self._game_loops.pop(session_id, None)
            return None
        return self._game_loops.get(session_id)

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=SESSION_NOT_FOUND,
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
        )

    def _status(self, session: Session) -> SessionStatus:
        phase = session.game_state.phase
        if phase == GamePhase.WON:
            return SessionStatus.WON
        if phase == GamePhase.LOST:
            return SessionStatus.LOST
        return SessionStatus.ACTIVE

    def _session_to_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=self._status(session),
            seed=session.seed,
            created_at=session.created_at,
            game_state=self._build_game_state(session.game_state),
            reward=self._fragment_info(session.reward) if session.reward else None,
        )

    def _turn_result_to_response(
        self,
        session: Session,
        result: TurnResult,
    ) -> MoveResponse | ErrorResponse:
        if not result.success:
            return ErrorResponse(
                error=result.errors[0] if result.errors else "Move rejected",
                error_code=self._error_code(result.error_code),
                details={"session_id": session.session_id},
            )

        return MoveResponse(
            session_id=session.session_id,
            success=True,
            status=self._status(session),
            changes=result.changes,
            game_state=self._build_game_state(session.game_state),
            reward=self._fragment_info(result.reward) if result.reward else None,
            progress_saved=result.progress_saved,
        )

    def _error_code(self, code: EngineErrorCode | None) -> ErrorCode:
        """Engine rejection reasons share names with API error codes."""
        if code is None or code.value not in ErrorCode.__members__:
            return ErrorCode.INTERNAL_ERROR
        return ErrorCode[code.value]

    def _build_game_state(self, state: GameState) -> GameStateResponse:
        """Build complete game state response."""
        actions = legal_actions(state)
        playable_ids = [a.payload.card_id for a in actions if a.payload.card_id]

        return GameStateResponse(
            tableau=[
                [self._card_info(card, card.card_id in playable_ids) for card in row]
                for row in state.tableau
            ],
            waste_top=self._card_info(state.waste_top) if state.waste_top else None,
            waste_count=len(state.waste),
            stock_count=len(state.stock),
            score=state.score,
            moves=state.moves,
            streak=state.streak,
            phase=state.phase.value,
            cards_remaining=state.cards_remaining,
            playable_card_ids=playable_ids,
            can_draw=bool(state.stock) and not state.is_terminal,
        )

    def _card_info(self, card: Card, playable: bool = False) -> CardInfo:
        """Face-down cards only reveal their slot."""
        row = card.position.row if card.position else None
        col = card.position.col if card.position else None
        if not card.face_up:
            return CardInfo(face_up=False, row=row, col=col)
        return CardInfo(
            card_id=card.card_id,
            suit=card.suit.value,
            rank=card.rank.label,
            face_up=True,
            row=row,
            col=col,
            playable=playable,
        )

    def _fragment_info(self, fragment: Fragment) -> FragmentInfo:
        return FragmentInfo(**fragment.to_dict())

    def _artifact_info(self, artifact: Artifact) -> ArtifactInfo:
        return ArtifactInfo(
            **artifact.to_dict(),
            color=get_rarity_color(artifact.rarity),
        )

    def _progress_to_response(self, progress: PlayerProgress) -> ProgressResponse:
        return ProgressResponse(
            games_played=progress.games_played,
            games_won=progress.games_won,
            total_score=progress.total_score,
            current_streak=progress.current_streak,
            best_streak=progress.best_streak,
            fragments=[self._fragment_info(f) for f in progress.fragments],
            artifacts=[self._artifact_info(a) for a in progress.artifacts],
        )
