"""End-to-end tests for the FocusFilter engine with the settings hub."""

import asyncio

import pytest

from focusfirewall.annotate import STYLESHEET_ID, is_marked
from focusfirewall.engine import FocusFilter
from focusfirewall.page import HostDocument
from focusfirewall.storage import SettingsHub

from .conftest import page_html, video_item


def marked_titles(engine):
    coordinator = engine.coordinator
    return sorted(
        coordinator.extract_title(item)
        for item in engine.document.select(engine.config.item_selectors)
        if is_marked(item)
    )


class TestFocusFilter:
    """Test the assembled engine."""

    @pytest.mark.asyncio
    async def test_startup_applies_stored_goal(self, feed_document, fast_config):
        """Stored goal is fetched and applied on start."""
        hub = SettingsHub()
        hub.set_goal("learn rust programming")

        async with FocusFilter(feed_document, hub, fast_config) as engine:
            assert engine.state.goal == "learn rust programming"
            assert marked_titles(engine) == ["Cute cat compilation"]
            assert feed_document.head.find("style", id=STYLESHEET_ID) is not None

        hub.close()

    @pytest.mark.asyncio
    async def test_infinite_scroll_items_get_classified(self, feed_document, fast_config):
        """Items appended after start are classified once the debounce settles."""
        hub = SettingsHub()
        hub.set_goal("rust")

        async with FocusFilter(feed_document, hub, fast_config) as engine:
            feed = feed_document.select_one("#contents")
            feed_document.insert(feed, video_item("Top 10 football goals"))
            feed_document.insert(feed, video_item("Rust async deep dive"))

            await asyncio.sleep(fast_config.debounce_seconds * 3)

            assert marked_titles(engine) == ["Cute cat compilation", "Top 10 football goals"]
            assert engine.watcher.scan_count == 1

        hub.close()

    @pytest.mark.asyncio
    async def test_goal_change_applies_instantly(self, feed_document, fast_config):
        """A new goal is reflected before the handler returns, without waiting."""
        hub = SettingsHub()
        hub.set_goal("rust")

        async with FocusFilter(feed_document, hub, fast_config) as engine:
            hub.set_goal("cat")
            assert marked_titles(engine) == ["Rust ownership explained"]

            hub.set_goal("")
            assert marked_titles(engine) == []

        hub.close()

    @pytest.mark.asyncio
    async def test_toggle_off_clears_marks(self, feed_document, fast_config):
        """Disabling with goal "rust" unmarks the irrelevant item."""
        hub = SettingsHub()
        hub.set_goal("rust")

        async with FocusFilter(feed_document, hub, fast_config) as engine:
            assert marked_titles(engine) == ["Cute cat compilation"]

            hub.set_enabled(False)
            assert marked_titles(engine) == []

            hub.set_enabled(True)
            assert marked_titles(engine) == ["Cute cat compilation"]

        hub.close()

    @pytest.mark.asyncio
    async def test_navigation_rescans_new_page(self, fast_config):
        """Single-page navigation to new content is classified."""
        document = HostDocument(page_html(video_item("Rust basics")), url="https://www.youtube.com/")
        hub = SettingsHub()
        hub.set_goal("rust")

        async with FocusFilter(document, hub, fast_config) as engine:
            document.navigate(
                "https://www.youtube.com/watch?v=abc",
                html=page_html(video_item("Rust basics"), video_item("Baking bread")),
            )
            await asyncio.sleep(fast_config.poll_seconds * 2 + fast_config.debounce_seconds * 3)

            assert marked_titles(engine) == ["Baking bread"]

        hub.close()

    @pytest.mark.asyncio
    async def test_unavailable_store_is_fail_open(self, feed_document, fast_config):
        """Without a store nothing is hidden."""
        async with FocusFilter(feed_document, None, fast_config) as engine:
            engine.rescan()
            assert marked_titles(engine) == []

    @pytest.mark.asyncio
    async def test_stop_unsubscribes_from_hub(self, feed_document, fast_config):
        """Stopping the engine detaches it from the hub."""
        hub = SettingsHub()
        engine = FocusFilter(feed_document, hub, fast_config)
        await engine.start()
        assert hub.subscriber_count == 1

        engine.stop()

        assert hub.subscriber_count == 0
        assert not engine.watcher.running
        hub.close()

    @pytest.mark.asyncio
    async def test_two_engines_share_one_hub(self, fast_config):
        """Every running engine receives the broadcast."""
        first = HostDocument(page_html(video_item("Cats")))
        second = HostDocument(page_html(video_item("Dogs")))
        hub = SettingsHub()

        async with FocusFilter(first, hub, fast_config) as a, FocusFilter(second, hub, fast_config) as b:
            hub.set_goal("rust")

            assert marked_titles(a) == ["Cats"]
            assert marked_titles(b) == ["Dogs"]

        hub.close()
