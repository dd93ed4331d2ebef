import logging
import time
from typing import Callable, Dict, Optional, Tuple

from app.settings import settings

logger = logging.getLogger(__name__)

MAX_ENTRIES = 512


class PageCache:
    """Rendered pages keyed by path, stale once older than the revalidation window."""

    def __init__(
        self,
        ttl_seconds: int = settings.REVALIDATE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, Tuple[float, str]] = {}

    def get(self, path: str) -> Optional[str]:
        entry = self._entries.get(path)
        if not entry:
            return None
        rendered_at, html = entry
        if self.clock() - rendered_at >= self.ttl_seconds:
            logger.debug(f"Cached page {path} is stale")
            return None
        return html

    def set(self, path: str, html: str) -> None:
        now = self.clock()
        # reinsert so dict order follows render time
        self._entries.pop(path, None)
        self._entries[path] = (now, html)
        if len(self._entries) > MAX_ENTRIES:
            self._prune(now)

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"Dropped {count} cached pages")
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def _prune(self, now: float) -> None:
        stale_keys = [
            key
            for key, (ts, _html) in self._entries.items()
            if now - ts >= self.ttl_seconds
        ]
        for key in stale_keys:
            self._entries.pop(key, None)

        overflow = len(self._entries) - MAX_ENTRIES
        for key in list(self._entries)[: max(overflow, 0)]:
            self._entries.pop(key, None)

    @property
    def cache_control(self) -> str:
        return f"s-maxage={self.ttl_seconds}, stale-while-revalidate"


page_cache = PageCache()
