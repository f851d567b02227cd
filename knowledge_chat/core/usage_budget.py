"""
Usage budget for external model calls.

Counts embedding and chat calls against configured limits. Consulted
before each external call.

Dependencies: threading, knowledge_chat.core.exceptions
System role: Quota enforcement
"""

import logging
import threading

from knowledge_chat.core.exceptions import QuotaExhaustedError

logger = logging.getLogger(__name__)

EMBED = "embed"
CHAT = "chat"


class UsageBudget:
    """
    Counts external calls against optional per-resource limits.

    A limit of None means unlimited. Counters are process-local.
    """

    def __init__(self, embed_limit: int | None = None, chat_limit: int | None = None) -> None:
        self._limits: dict[str, int | None] = {EMBED: embed_limit, CHAT: chat_limit}
        self._used: dict[str, int] = {EMBED: 0, CHAT: 0}
        self._lock = threading.Lock()

    def consume(self, resource: str) -> None:
        """
        Record one call, or refuse it when the budget is spent.

        Args:
            resource: "embed" or "chat"

        Raises:
            QuotaExhaustedError: If the resource limit has been reached
            KeyError: If the resource is unknown
        """
        with self._lock:
            limit = self._limits[resource]
            if limit is not None and self._used[resource] >= limit:
                logger.warning(f"{__name__}:consume - {resource} quota exhausted (limit={limit})")
                raise QuotaExhaustedError(resource=resource, limit=limit)
            self._used[resource] += 1

    def remaining(self) -> dict[str, int | None]:
        """Remaining calls per resource (None when unlimited)."""
        with self._lock:
            return {
                resource: None if limit is None else max(limit - self._used[resource], 0)
                for resource, limit in self._limits.items()
            }
