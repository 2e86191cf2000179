"""Per-client login throttling."""

import logging
import time

from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

from evaluaciones.errors import RateLimitError

logger = logging.getLogger(__name__)


class LoginRateLimiter:
    """Moving-window limit on login attempts, keyed by client address."""

    namespace = "login"

    def __init__(self, rate: str):
        self.limit = parse(rate)
        self._storage = MemoryStorage()
        self._limiter = MovingWindowRateLimiter(self._storage)

    def hit(self, client: str) -> None:
        """Count one attempt; raise RateLimitError once the window is full."""
        if self._limiter.hit(self.limit, self.namespace, client):
            return
        reset_at, _ = self._limiter.get_window_stats(self.limit, self.namespace, client)
        logger.warning("Login rate limit exceeded for %s", client)
        raise RateLimitError(retry_after=max(1, int(reset_at - time.time())))
