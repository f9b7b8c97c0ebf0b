"""Main API router."""

from fastapi import APIRouter

from knighttrails.api.challenge import router as challenge_router
from knighttrails.api.sessions import router as sessions_router

api_router = APIRouter()
api_router.include_router(sessions_router)
api_router.include_router(challenge_router)
