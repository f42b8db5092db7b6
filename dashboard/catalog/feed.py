"""
==============================================================================
Catalog Feed Module
==============================================================================

Push-based catalog updates for live views.

A view acquires a Subscription, receives the current snapshot immediately,
then every snapshot published after a catalog write, and releases the
subscription when it is torn down.

Lifecycle:
---------
    subscribe(cb) ──▶ cb(current) ──▶ cb(v+1) ──▶ cb(v+2) ──▶ close()

    with feed.subscription(cb):     # released on exit, even on error
        ...

==============================================================================
"""

from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Generator, Iterable

from dashboard.catalog.models import CatalogSnapshot, ProductRecord
from dashboard.db.models import utcnow


# Module logger
logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[CatalogSnapshot], None]


class Subscription:
    """Handle returned by CatalogFeed.subscribe()."""

    def __init__(self, feed: CatalogFeed, subscription_id: int) -> None:
        self._feed = feed
        self._id = subscription_id
        self._closed = False

    @property
    def id(self) -> int:
        return self._id

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Stop receiving snapshots. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._feed._unsubscribe(self._id)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class CatalogFeed:
    """
    Publisher of ordered catalog snapshots.

    Attributes:
        _snapshot: Latest published snapshot
        _subscribers: Live callbacks keyed by subscription id, in
            subscription order

    Example:
        >>> feed = CatalogFeed()
        >>> seen = []
        >>> with feed.subscription(seen.append):
        ...     feed.publish([])
        >>> [s.version for s in seen]
        [0, 1]
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._ids = itertools.count(1)
        self._subscribers: Dict[int, SnapshotCallback] = {}
        self._snapshot = CatalogSnapshot(version=0, products=(), taken_at=utcnow())

    # =========================================================================
    # SNAPSHOTS
    # =========================================================================

    def snapshot(self) -> CatalogSnapshot:
        """Latest published snapshot."""
        return self._snapshot

    def publish(self, products: Iterable[ProductRecord]) -> CatalogSnapshot:
        """
        Replace the current snapshot and deliver it to every subscriber.

        Args:
            products: Catalog in display order

        Returns:
            The newly published snapshot
        """
        with self._lock:
            snapshot = CatalogSnapshot(
                version=self._snapshot.version + 1,
                products=tuple(products),
                taken_at=utcnow(),
            )
            self._snapshot = snapshot
            callbacks = list(self._subscribers.items())

        logger.debug(
            f"Publishing catalog v{snapshot.version} "
            f"({len(snapshot)} products) to {len(callbacks)} subscribers"
        )

        for subscription_id, callback in callbacks:
            self._deliver(subscription_id, callback, snapshot)

        return snapshot

    # =========================================================================
    # SUBSCRIPTIONS
    # =========================================================================

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        """
        Register a callback and deliver the current snapshot to it.

        Returns:
            Subscription handle; call close() to release it
        """
        with self._lock:
            subscription_id = next(self._ids)
            self._subscribers[subscription_id] = callback
            current = self._snapshot

        logger.debug(f"Catalog subscription #{subscription_id} opened")
        self._deliver(subscription_id, callback, current)

        return Subscription(self, subscription_id)

    @contextmanager
    def subscription(self, callback: SnapshotCallback) -> Generator[Subscription, None, None]:
        """Scoped subscription, released when the block exits."""
        handle = self.subscribe(callback)
        try:
            yield handle
        finally:
            handle.close()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def _unsubscribe(self, subscription_id: int) -> None:
        with self._lock:
            self._subscribers.pop(subscription_id, None)
        logger.debug(f"Catalog subscription #{subscription_id} closed")

    def _deliver(
        self,
        subscription_id: int,
        callback: SnapshotCallback,
        snapshot: CatalogSnapshot
    ) -> None:
        # A failing subscriber must not starve the others
        try:
            callback(snapshot)
        except Exception:
            logger.exception(
                f"Catalog subscriber #{subscription_id} failed on v{snapshot.version}"
            )
