"""
View invalidation for listing routes.
After a successful mutation the action marks its listing stale so the next
visitor triggers a fresh read.
"""

from typing import Any, Callable, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

PathListener = Callable[[str], None]


class ListingCache:
    """
    Rendered listing payloads keyed by route path.

    A path is served from here until it is marked stale. Each path also
    carries a generation, bumped whenever it is marked stale, so a read that
    started before a mutation cannot store its result after the invalidation.
    """

    def __init__(self):
        self._entries: Dict[str, Any] = {}
        self._generations: Dict[str, int] = {}

    def get(self, path: str) -> Optional[Any]:
        return self._entries.get(path)

    def generation(self, path: str) -> int:
        """Current generation of a path; capture it before reading the listing."""
        return self._generations.get(path, 0)

    def set(self, path: str, payload: Any, generation: Optional[int] = None) -> bool:
        """
        Store a listing payload.

        Args:
            path: Logical route path
            payload: Rendered listing
            generation: Generation captured before the read; when given, the
                payload is only stored if the path has not been marked stale since

        Returns:
            True if the payload was stored
        """
        if generation is not None and generation != self.generation(path):
            logger.debug(f"Discarded listing read from before invalidation: {path}")
            return False
        self._entries[path] = payload
        return True

    def mark_stale(self, path: str) -> None:
        self._generations[path] = self.generation(path) + 1
        if self._entries.pop(path, None) is not None:
            logger.debug(f"Listing cache entry dropped: {path}")

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def clear(self) -> None:
        # Generations survive so in-flight reads stay guarded
        self._entries.clear()


class ViewInvalidator:
    """
    Post-commit notification step shared by every form action.

    `revalidate_path` is fire-and-forget: it returns nothing, and a failing
    listener is logged without affecting the action that triggered it.
    """

    def __init__(self, cache: Optional[ListingCache] = None):
        self.cache = cache if cache is not None else ListingCache()
        self._listeners: List[PathListener] = []

    def subscribe(self, listener: PathListener) -> None:
        """Register a callable invoked with each revalidated path."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: PathListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def revalidate_path(self, path: str) -> None:
        """
        Mark any cached rendering of a route path as stale.

        Args:
            path: Logical route path, e.g. /dashboard/invoices
        """
        self.cache.mark_stale(path)
        logger.info(f"Revalidated path: {path}")

        for listener in list(self._listeners):
            try:
                listener(path)
            except Exception:
                logger.warning(f"Revalidation listener failed for {path}", exc_info=True)


# Process-wide invalidator shared by the routers
listing_cache = ListingCache()
view_invalidator = ViewInvalidator(listing_cache)


def get_view_invalidator() -> ViewInvalidator:
    """Dependency returning the process-wide view invalidator."""
    return view_invalidator
