"""Tests for the settings storage and hub."""

import pytest

from focusfirewall.engine import FocusState, GOAL_UPDATED, TOGGLE_CHANGED
from focusfirewall.storage import (
    FOCUS_GOAL_KEY,
    IS_ENABLED_KEY,
    SET_ENABLED,
    SET_GOAL,
    SettingsHub,
    get_setting,
    get_updated_at,
    init_db,
    upsert_setting,
)


class TestSqlite:
    """Test the key-value settings table."""

    def test_defaults_seeded(self):
        """A fresh database has no goal and filtering enabled."""
        conn = init_db(":memory:")

        assert get_setting(conn, FOCUS_GOAL_KEY) == ""
        assert get_setting(conn, IS_ENABLED_KEY) is True
        assert get_updated_at(conn, FOCUS_GOAL_KEY) is not None
        conn.close()

    def test_upsert_and_reinit_preserves_values(self, tmp_path):
        """Re-initializing never overwrites stored settings."""
        db_path = str(tmp_path / "db" / "settings.sqlite3")
        conn = init_db(db_path)
        upsert_setting(conn, FOCUS_GOAL_KEY, "rust")
        conn.close()

        conn = init_db(db_path)
        assert get_setting(conn, FOCUS_GOAL_KEY) == "rust"
        conn.close()

    def test_missing_key_default(self):
        """Unknown keys return the given default."""
        conn = init_db(":memory:")
        assert get_setting(conn, "socialTimers", {}) == {}
        conn.close()


class TestSettingsHub:
    """Test the message protocol and broadcasting."""

    @pytest.mark.asyncio
    async def test_get_state(self):
        """GET_STATE returns the stored goal and flag."""
        hub = SettingsHub()

        response = await hub.handle_message({"type": "GET_STATE"})

        assert response == {"focusGoal": "", "isEnabled": True}
        hub.close()

    @pytest.mark.asyncio
    async def test_set_goal_persists_and_broadcasts(self):
        """SET_GOAL stores the goal and notifies subscribers."""
        hub = SettingsHub()
        received = []
        hub.on_state_change(received.append)

        response = await hub.handle_message({"type": SET_GOAL, "goal": "learn rust"})

        assert response == {"success": True}
        assert received == [{"type": GOAL_UPDATED, "goal": "learn rust"}]
        assert (await hub.fetch_state()) == FocusState(goal="learn rust", enabled=True)
        hub.close()

    @pytest.mark.asyncio
    async def test_set_enabled_persists_and_broadcasts(self):
        """SET_ENABLED stores the flag and notifies subscribers."""
        hub = SettingsHub()
        received = []
        hub.on_state_change(received.append)

        await hub.handle_message({"type": SET_ENABLED, "isEnabled": False})

        assert received == [{"type": TOGGLE_CHANGED, "isEnabled": False}]
        assert hub.get_state().enabled is False
        hub.close()

    @pytest.mark.asyncio
    async def test_unknown_message(self):
        """Unknown message types get no response."""
        hub = SettingsHub()

        assert await hub.handle_message({"type": "PING"}) is None
        assert await hub.handle_message(None) is None
        hub.close()

    def test_failing_subscriber_does_not_block_others(self):
        """One broken subscriber never stops delivery to the rest."""
        hub = SettingsHub()
        received = []

        def broken(message):
            raise RuntimeError("tab closed")

        hub.on_state_change(broken)
        hub.on_state_change(received.append)

        hub.set_goal("rust")

        assert received == [{"type": GOAL_UPDATED, "goal": "rust"}]
        hub.close()

    def test_unsubscribe(self):
        """Unsubscribed listeners receive nothing."""
        hub = SettingsHub()
        received = []
        unsubscribe = hub.on_state_change(received.append)

        unsubscribe()
        unsubscribe()
        hub.set_enabled(False)

        assert received == []
        assert hub.subscriber_count == 0
        hub.close()
