"""Session API endpoints.

Commands that the board rejects (illegal moves, undo with nothing to undo,
a third knight) are not errors: they answer 200 with ``applied`` false and
the unchanged state.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field

from knighttrails.api.rate_limit import NARRATE_LIMIT, limiter
from knighttrails.game.board import from_algebraic, to_algebraic
from knighttrails.services.narrator import MIN_NARRATION_MOVES, PatternNarrator, get_narrator
from knighttrails.services.session_service import (
    ManagedSession,
    NarrationBusyError,
    SessionService,
    get_session_service,
)
from knighttrails.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


# Request models


class MoveRequest(BaseModel):
    """Request body for moving the active knight.

    Either ``row`` and ``col`` or an algebraic ``square`` such as "c7".
    """

    row: int | None = None
    col: int | None = None
    square: str | None = None


class ActiveKnightRequest(BaseModel):
    """Request body for switching the active knight."""

    knight: int


# Response models


class SessionStateResponse(BaseModel):
    """Full state of a session as the board UI needs it."""

    board: list[list[int | None]]
    paths: list[list[list[int]]]
    squares: list[list[str]]
    closed: list[bool]
    active_knight: int = Field(alias="activeKnight")
    current_position: list[int] | None = Field(alias="currentPosition")
    total_moves: int = Field(alias="totalMoves")
    possible_moves: list[list[int]] = Field(alias="possibleMoves")
    can_narrate: bool = Field(alias="canNarrate")
    narrating: bool
    narration: str | None = None

    model_config = {"populate_by_name": True}


class CreateSessionResponse(BaseModel):
    """Response for creating a session."""

    session_id: str = Field(alias="sessionId")
    state: SessionStateResponse

    model_config = {"populate_by_name": True}


class CommandResponse(BaseModel):
    """Response for a board command."""

    applied: bool
    state: SessionStateResponse


class NarrationResponse(BaseModel):
    """Narration of the current pattern."""

    text: str


# Helper functions


def _build_state(managed: ManagedSession) -> SessionStateResponse:
    """Build the state response for a session."""
    session = managed.session
    current = session.current_position()
    total_moves = session.total_moves()

    return SessionStateResponse(
        board=session.board_state(),
        paths=[[pos.as_list() for pos in path] for path in session.paths],
        squares=[[to_algebraic(pos) for pos in path] for path in session.paths],
        closed=[session.is_closed(i) for i in range(session.knight_count)],
        active_knight=session.active_knight,
        current_position=current.as_list() if current else None,
        total_moves=total_moves,
        possible_moves=[pos.as_list() for pos in session.possible_moves()],
        can_narrate=total_moves >= MIN_NARRATION_MOVES and not managed.narration_busy,
        narrating=managed.narration_busy,
        narration=managed.narration,
    )


def _get_managed(service: SessionService, session_id: str) -> ManagedSession:
    """Look up a session or raise 404."""
    managed = service.get_managed_session(session_id)
    if managed is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return managed


def _resolve_target(request: MoveRequest) -> tuple[int, int]:
    """Get the (row, col) a move request points at."""
    if request.square is not None:
        try:
            pos = from_algebraic(request.square)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return pos.row, pos.col

    if request.row is None or request.col is None:
        raise HTTPException(status_code=400, detail="Provide row and col, or square")
    return request.row, request.col


def _command_response(managed: ManagedSession, applied: bool) -> CommandResponse:
    return CommandResponse(applied=applied, state=_build_state(managed))


Service = Annotated[SessionService, Depends(get_session_service)]


# Endpoints


@router.post("", response_model=CreateSessionResponse)
async def create_session(service: Service) -> CreateSessionResponse:
    """Start a new session with one knight and no moves."""
    service.cleanup_stale_sessions(get_settings().session_max_age_seconds)
    session_id = service.create_session()
    managed = _get_managed(service, session_id)
    return CreateSessionResponse(session_id=session_id, state=_build_state(managed))


@router.get("/{session_id}", response_model=SessionStateResponse)
async def get_session_state(session_id: str, service: Service) -> SessionStateResponse:
    """Get the current state of a session."""
    return _build_state(_get_managed(service, session_id))


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, service: Service) -> Response:
    """End a session."""
    if not service.delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=204)


@router.post("/{session_id}/move", response_model=CommandResponse)
async def move(session_id: str, request: MoveRequest, service: Service) -> CommandResponse:
    """Move the active knight to a square."""
    managed = _get_managed(service, session_id)
    row, col = _resolve_target(request)
    applied = managed.session.move_to(row, col)
    return _command_response(managed, applied)


@router.post("/{session_id}/undo", response_model=CommandResponse)
async def undo(session_id: str, service: Service) -> CommandResponse:
    """Take back the active knight's last move."""
    managed = _get_managed(service, session_id)
    return _command_response(managed, managed.session.undo())


@router.post("/{session_id}/knights", response_model=CommandResponse)
async def add_knight(session_id: str, service: Service) -> CommandResponse:
    """Add the second knight and make it active."""
    managed = _get_managed(service, session_id)
    return _command_response(managed, managed.session.add_knight())


@router.post("/{session_id}/active", response_model=CommandResponse)
async def set_active_knight(
    session_id: str, request: ActiveKnightRequest, service: Service
) -> CommandResponse:
    """Switch which knight receives moves."""
    managed = _get_managed(service, session_id)
    return _command_response(managed, managed.session.set_active_knight(request.knight))


@router.post("/{session_id}/auto-step", response_model=CommandResponse)
async def auto_step(session_id: str, service: Service) -> CommandResponse:
    """Extend the active knight by one move using Warnsdorff's rule."""
    managed = _get_managed(service, session_id)
    return _command_response(managed, managed.session.auto_step())


@router.post("/{session_id}/reset", response_model=CommandResponse)
async def reset(session_id: str, service: Service) -> CommandResponse:
    """Clear all knights and start over."""
    managed = _get_managed(service, session_id)
    service.reset_session(session_id)
    return _command_response(managed, True)


@router.post("/{session_id}/narrate", response_model=NarrationResponse)
@limiter.limit(NARRATE_LIMIT)
async def narrate(
    request: Request,
    session_id: str,
    service: Service,
    narrator: Annotated[PatternNarrator, Depends(get_narrator)],
) -> NarrationResponse:
    """Describe the pattern the knights have drawn."""
    try:
        text = await service.narrate(session_id, narrator)
    except NarrationBusyError as e:
        raise HTTPException(status_code=409, detail="Narration already in progress") from e

    if text is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return NarrationResponse(text=text)
