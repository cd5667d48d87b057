from functools import wraps
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)

TTL_SHORT = 60
TTL_MEDIUM = 300
TTL_LONG = 3600

PREFIX_TEAMS = "teams"
PREFIX_STATS = "team_stats"
PREFIX_GAMES = "games"


class SimpleCache:
    def __init__(self, default_ttl: int = 300):
        self._cache: Dict[str, Dict[str, Any]] = {}
        self.default_ttl = default_ttl
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        if key in self._cache:
            entry = self._cache[key]
            if datetime.utcnow() < entry["expires_at"]:
                self.hits += 1
                return entry["value"]
            else:
                del self._cache[key]

        self.misses += 1
        return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = ttl or self.default_ttl
        self._cache[key] = {
            "value": value,
            "expires_at": datetime.utcnow() + timedelta(seconds=ttl),
        }

    def clear(self) -> int:
        count = len(self._cache)
        self._cache.clear()
        return count

    def clear_prefix(self, prefix: str) -> int:
        keys_to_delete = [k for k in self._cache.keys() if k.startswith(prefix)]
        for key in keys_to_delete:
            del self._cache[key]
        return len(keys_to_delete)

    def stats(self) -> Dict[str, Any]:
        total = self.hits + self.misses
        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / total if total > 0 else 0,
            "size": len(self._cache)
        }


cache = SimpleCache(default_ttl=TTL_MEDIUM)


def invalidate_cache(*prefixes: str):
    """Drop cached entries under the given prefixes after the wrapped call."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            result = func(*args, **kwargs)
            for prefix in prefixes:
                cleared = cache.clear_prefix(prefix)
                if cleared > 0:
                    logger.debug(f"Invalidated {cleared} cache entries with prefix '{prefix}'")
            return result
        return wrapper
    return decorator
