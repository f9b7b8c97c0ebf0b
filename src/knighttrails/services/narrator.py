"""Pattern narration using a hosted language model.

The narrator turns knight paths into a prompt and asks an OpenAI-compatible
chat endpoint to describe the picture they draw. It is a best-effort
collaborator: failures are logged and replaced with fixed fallback text,
never raised to the caller.
"""

import logging
import textwrap
from dataclasses import dataclass

from openai import AsyncOpenAI

from knighttrails.game.board import Position, to_algebraic
from knighttrails.game.moves import is_closed_loop
from knighttrails.settings import get_settings

logger = logging.getLogger(__name__)

# Narration is refused below this many visited squares
MIN_NARRATION_MOVES = 3

TOO_FEW_MOVES_TEXT = "Make a few moves first so I can see the pattern!"
EMPTY_NARRATION_TEXT = "I couldn't analyze that pattern, but it looks interesting!"
NARRATION_ERROR_TEXT = "My creative circuits are overloaded right now. Try again later."

EMPTY_CHALLENGE_TEXT = "Start at a corner and touch all 4 center squares."
CHALLENGE_ERROR_TEXT = "Create a closed loop in the center."

CHALLENGE_PROMPT = (
    "Give me a short, fun challenge for a Knight's Tour on a chessboard. "
    "E.g., 'Start at A1 and end at H8'. Keep it under 20 words."
)


@dataclass(frozen=True)
class PathDescription:
    """One knight's path as sent to the narrator.

    Attributes:
        knight: Knight index (0 or 1)
        squares: Visited squares in algebraic notation, in move order
        is_closed: Whether the path ends on its start square
    """

    knight: int
    squares: tuple[str, ...]
    is_closed: bool


def build_descriptions(paths: list[list[Position]]) -> list[PathDescription]:
    """Describe every knight that has moved, skipping empty paths."""
    return [
        PathDescription(
            knight=index,
            squares=tuple(to_algebraic(pos) for pos in path),
            is_closed=is_closed_loop(path),
        )
        for index, path in enumerate(paths)
        if path
    ]


def build_prompt(descriptions: list[PathDescription]) -> str:
    """Render the narration prompt for a set of path descriptions."""
    lines = []
    for desc in descriptions:
        line = f"**Knight {desc.knight + 1} Path:** {' -> '.join(desc.squares)}"
        if desc.is_closed:
            line += " (Closed Loop)"
        lines.append(line)

    prompt = textwrap.dedent(
        """\
        I have created patterns on a chessboard using Knight's moves.

        {paths}

        As an abstract art critic and pattern analyst, describe the geometry created.
        If there are two knights, analyze how their paths interact (do they mirror, avoid, or intertwine?).

        **Instructions:**
        1. Give the masterpiece a creative **Title**.
        2. Provide a **Visual Interpretation**.
        3. Use **Markdown** formatting (Bold for emphasis, bullet points).
        4. Keep it concise (max 100 words).
        """
    )
    return prompt.format(paths="\n\n".join(lines))


class PatternNarrator:
    """Client for narrating knight patterns.

    A narrator without a client is disabled and answers every request with
    the failure fallback.
    """

    def __init__(self, client: AsyncOpenAI | None, model: str) -> None:
        self.client = client
        self.model = model

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def _generate(self, prompt: str) -> str | None:
        """Send a single-turn prompt and return the reply text."""
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def narrate(self, paths: list[list[Position]]) -> str:
        """Describe the pattern drawn by the given paths.

        Args:
            paths: A snapshot of every knight's path

        Returns:
            Markdown text from the model, or a fixed fallback message
        """
        total_moves = sum(len(path) for path in paths)
        if total_moves < MIN_NARRATION_MOVES:
            return TOO_FEW_MOVES_TEXT

        descriptions = build_descriptions(paths)
        prompt = build_prompt(descriptions)

        if not self.enabled:
            logger.info(f"[DEV] Narrator disabled, prompt was:\n{prompt}")
            return NARRATION_ERROR_TEXT

        try:
            text = await self._generate(prompt)
        except Exception:
            logger.exception("Pattern narration failed")
            return NARRATION_ERROR_TEXT

        if not text or not text.strip():
            return EMPTY_NARRATION_TEXT
        return text

    async def challenge(self) -> str:
        """Ask the model for a short knight's tour challenge."""
        if not self.enabled:
            logger.info("[DEV] Narrator disabled, using default challenge")
            return CHALLENGE_ERROR_TEXT

        try:
            text = await self._generate(CHALLENGE_PROMPT)
        except Exception:
            logger.exception("Challenge generation failed")
            return CHALLENGE_ERROR_TEXT

        text = (text or "").strip()
        return text or EMPTY_CHALLENGE_TEXT


def create_narrator() -> PatternNarrator:
    """Build a narrator from application settings."""
    settings = get_settings()
    if not settings.narrator_enabled:
        return PatternNarrator(client=None, model=settings.llm_model)

    client = AsyncOpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        timeout=settings.llm_timeout_seconds,
    )
    return PatternNarrator(client=client, model=settings.llm_model)


# Reusable narrator (lazy singleton)
_narrator: PatternNarrator | None = None


def get_narrator() -> PatternNarrator:
    """Get the global narrator instance."""
    global _narrator
    if _narrator is None:
        _narrator = create_narrator()
    return _narrator
