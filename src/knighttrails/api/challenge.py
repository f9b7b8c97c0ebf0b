"""Challenge API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from knighttrails.api.rate_limit import CHALLENGE_LIMIT, limiter
from knighttrails.services.narrator import PatternNarrator, get_narrator

router = APIRouter(tags=["challenge"])


class ChallengeResponse(BaseModel):
    """A suggested knight's tour challenge."""

    text: str


@router.get("/challenge", response_model=ChallengeResponse)
@limiter.limit(CHALLENGE_LIMIT)
async def get_challenge(
    request: Request,
    narrator: Annotated[PatternNarrator, Depends(get_narrator)],
) -> ChallengeResponse:
    """Get a short challenge to try on the board."""
    return ChallengeResponse(text=await narrator.challenge())
