"""
==============================================================================
Catalog Feed Tests
==============================================================================

Tests for snapshot publication and scoped subscriptions.

==============================================================================
"""

import pytest

from dashboard.catalog.feed import CatalogFeed
from dashboard.catalog.models import ProductRecord


def _records(*names):
    return [ProductRecord(id=str(i), name=name) for i, name in enumerate(names)]


class TestCatalogFeed:
    """Tests for CatalogFeed."""

    def test_initial_snapshot_is_empty(self, feed: CatalogFeed):
        snapshot = feed.snapshot()
        assert snapshot.version == 0
        assert len(snapshot) == 0

    def test_publish_bumps_version(self, feed: CatalogFeed):
        first = feed.publish(_records("Lamp"))
        second = feed.publish(_records("Lamp", "Socket"))

        assert (first.version, second.version) == (1, 2)
        assert feed.snapshot() is second
        assert [p.name for p in second.products] == ["Lamp", "Socket"]

    def test_subscribe_delivers_current_snapshot(self, feed: CatalogFeed):
        feed.publish(_records("Lamp"))
        seen = []

        feed.subscribe(seen.append)

        assert [s.version for s in seen] == [1]

    def test_subscriber_receives_publications(self, feed: CatalogFeed):
        seen = []
        feed.subscribe(seen.append)

        feed.publish(_records("Lamp"))
        feed.publish([])

        assert [s.version for s in seen] == [0, 1, 2]
        assert len(seen[-1]) == 0

    def test_close_stops_delivery(self, feed: CatalogFeed):
        seen = []
        subscription = feed.subscribe(seen.append)

        subscription.close()
        subscription.close()
        feed.publish(_records("Lamp"))

        assert subscription.closed
        assert [s.version for s in seen] == [0]
        assert feed.subscriber_count == 0

    def test_scoped_subscription_released_on_error(self, feed: CatalogFeed):
        seen = []

        with pytest.raises(RuntimeError):
            with feed.subscription(seen.append):
                assert feed.subscriber_count == 1
                raise RuntimeError("boom")

        assert feed.subscriber_count == 0

    def test_failing_subscriber_does_not_block_others(self, feed: CatalogFeed):
        def broken(snapshot):
            if snapshot.version > 0:
                raise ValueError("subscriber failure")

        seen = []
        feed.subscribe(broken)
        feed.subscribe(seen.append)

        feed.publish(_records("Lamp"))

        assert [s.version for s in seen] == [0, 1]

    def test_snapshots_are_immutable(self, feed: CatalogFeed):
        snapshot = feed.publish(_records("Lamp"))

        with pytest.raises(Exception):
            snapshot.products[0].name = "Changed"
