from typing import Any, Callable, Dict, Optional
import time


class IdentityCache:
    """Single-slot cache with TTL support.

    Holds one value for one owner. A lookup for a different owner, or after
    the TTL has elapsed, misses and drops the slot.
    """

    def __init__(self, ttl_ms: int = 30_000, clock: Callable[[], float] = time.monotonic):
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._slot: Optional[Dict[str, Any]] = None

    def set(self, owner_id: str, value: Any) -> None:
        """Store a value for the owner, replacing whatever was cached"""

        self._slot = {
            "owner_id": owner_id,
            "value": value,
            "expires_at": self._clock() + self.ttl_ms / 1000
        }

    def get(self, owner_id: str) -> Optional[Any]:
        """Get the cached value if it belongs to the owner and has not expired"""

        if self._slot is None:
            return None

        if self._slot["owner_id"] != owner_id:
            return None

        # Check if expired
        if self._clock() >= self._slot["expires_at"]:
            self._slot = None
            return None

        return self._slot["value"]

    def clear(self) -> None:
        self._slot = None

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics"""

        if self._slot is None:
            return {"cached": False}

        return {
            "cached": True,
            "owner_id": self._slot["owner_id"],
            "expires_in_ms": max(0, int((self._slot["expires_at"] - self._clock()) * 1000))
        }
