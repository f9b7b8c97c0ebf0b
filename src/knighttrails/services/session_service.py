"""Session service for managing knight trail sessions.

Sessions live in memory only. Each one owns its knight paths plus the
bookkeeping for pattern narration.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime

from knighttrails.game.paths import PathSession
from knighttrails.services.narrator import PatternNarrator

logger = logging.getLogger(__name__)


class NarrationBusyError(Exception):
    """Raised when a narration is requested while one is outstanding."""


@dataclass
class ManagedSession:
    """A session being managed by the service.

    Attributes:
        session: The knight paths and active knight
        narration_busy: True while a narration request is outstanding
        narration: Text of the last completed narration
        generation: Bumped on every reset; narrations started under an older
            generation are not stored
        created_at: When the session was created
        last_activity: When the session was last accessed
    """

    session: PathSession = field(default_factory=PathSession)
    narration_busy: bool = False
    narration: str | None = None
    generation: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)


_SESSION_ID_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
_SESSION_ID_LENGTH = 8


def _generate_session_id() -> str:
    """Generate a session ID."""
    return "".join(random.choices(_SESSION_ID_ALPHABET, k=_SESSION_ID_LENGTH))


class SessionService:
    """Creates, looks up and expires sessions."""

    def __init__(self) -> None:
        self.sessions: dict[str, ManagedSession] = {}

    def create_session(self) -> str:
        """Create a new session and return its ID."""
        session_id = _generate_session_id()
        while session_id in self.sessions:
            session_id = _generate_session_id()

        self.sessions[session_id] = ManagedSession()
        logger.info(f"Session {session_id} created")
        return session_id

    def get_managed_session(self, session_id: str) -> ManagedSession | None:
        """Get a managed session and mark it as active."""
        managed = self.sessions.get(session_id)
        if managed is not None:
            managed.last_activity = datetime.now()
        return managed

    def get_session(self, session_id: str) -> PathSession | None:
        """Get the paths for a session."""
        managed = self.get_managed_session(session_id)
        if managed is None:
            return None
        return managed.session

    def delete_session(self, session_id: str) -> bool:
        """Delete a session. Returns True if it existed."""
        if self.sessions.pop(session_id, None) is None:
            return False
        logger.info(f"Session {session_id} deleted")
        return True

    def reset_session(self, session_id: str) -> bool:
        """Reset a session's knights and drop its stored narration.

        Returns:
            True if the session exists
        """
        managed = self.get_managed_session(session_id)
        if managed is None:
            return False

        managed.session.reset()
        managed.narration = None
        managed.generation += 1
        return True

    async def narrate(self, session_id: str, narrator: PatternNarrator) -> str | None:
        """Narrate a session's current pattern.

        The paths are copied before the request goes out, so commands that
        arrive while it is pending do not change what gets described.

        Returns:
            The narration text, or None if the session does not exist

        Raises:
            NarrationBusyError: If a narration is already in progress
        """
        managed = self.get_managed_session(session_id)
        if managed is None:
            return None
        if managed.narration_busy:
            raise NarrationBusyError(f"Narration already in progress for {session_id}")

        snapshot = managed.session.snapshot()
        generation = managed.generation
        managed.narration_busy = True
        try:
            text = await narrator.narrate(snapshot)
        finally:
            managed.narration_busy = False

        if managed.generation == generation:
            managed.narration = text
        else:
            logger.debug(f"Session {session_id} was reset during narration, result not stored")
        return text

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """Remove sessions that haven't been accessed recently.

        Returns:
            Number of sessions cleaned up
        """
        now = datetime.now()
        stale = [
            session_id
            for session_id, managed in self.sessions.items()
            if (now - managed.last_activity).total_seconds() > max_age_seconds
        ]

        for session_id in stale:
            del self.sessions[session_id]

        if stale:
            logger.info(f"Cleaned up {len(stale)} stale sessions")
        return len(stale)


# Global singleton instance
_session_service: SessionService | None = None


def get_session_service() -> SessionService:
    """Get the global session service instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
