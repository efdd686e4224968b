"""
cf-cache-utils — One-Time Action Tokens

Anti-replay tokens for interactive actions. A token is bound to an action
name and a user, expires after a lifetime, and is accepted exactly once.
"""

import logging
import secrets
import threading
import time
from collections import OrderedDict
from collections.abc import Callable

logger = logging.getLogger(__name__)


class NonceStore:
    """
    In-memory one-time token store with expiry and bounded size.

    Args:
        lifetime_seconds: How long an issued token stays valid
        max_size: Oldest tokens are dropped beyond this many outstanding
        clock: Time source, seconds since epoch
    """

    def __init__(
        self,
        lifetime_seconds: int = 86400,
        max_size: int = 10_000,
        clock: Callable[[], float] = time.time,
    ):
        self.lifetime_seconds = lifetime_seconds
        self.max_size = max_size
        self._clock = clock
        # token -> (action, user_id, expiry)
        self._tokens: OrderedDict[str, tuple[str, int, float]] = OrderedDict()
        self._lock = threading.Lock()

    def issue(self, action: str, user_id: int) -> str:
        """Create a token for one use of ``action`` by ``user_id``."""
        token = secrets.token_urlsafe(16)
        with self._lock:
            if len(self._tokens) >= self.max_size:
                self._tokens.popitem(last=False)
            self._tokens[token] = (action, user_id, self._clock() + self.lifetime_seconds)
        return token

    def consume(self, action: str, user_id: int, token: str) -> bool:
        """
        Verify and invalidate a token.

        Returns:
            True only for an unexpired token issued for this action and user
        """
        if not token:
            return False

        with self._lock:
            entry = self._tokens.get(token)
            if entry is None:
                logger.warning("Rejected unknown or reused action token", extra={"action": action, "user_id": user_id})
                return False

            issued_action, issued_user, expiry = entry
            # only the owning action and user remove the token
            if issued_action != action or issued_user != user_id:
                logger.warning("Rejected action token issued for another action or user", extra={"action": action})
                return False
            del self._tokens[token]

        if self._clock() > expiry:
            logger.warning("Rejected expired action token", extra={"action": action, "user_id": user_id})
            return False
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
