"""Rate limiting for endpoints that call the language model.

Uses SlowAPI so a single client cannot run up model usage. Limits are
attached with ``@limiter.limit(...)`` on each route, so every route keeps
its own counter.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from knighttrails.settings import get_settings

# Create the limiter instance using IP address as the key.
# Disabled via settings (e.g., during tests).
limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().rate_limiting_enabled,
)

# Format: "requests/period" (e.g., "5/minute", "3/hour")
NARRATE_LIMIT = "6/minute"
CHALLENGE_LIMIT = "10/minute"
