"""
Settings hub for Focus Firewall.

Persists the focus goal and enabled flag and relays changes to every
subscribed engine, speaking the GET_STATE / SET_GOAL / SET_ENABLED
message protocol.
"""

import logging
import sqlite3
from typing import Any, Callable, Dict, List, Optional

from ..engine.state import FocusState
from ..engine.sync import GET_STATE, GOAL_UPDATED, TOGGLE_CHANGED
from .sqlite import (
    FOCUS_GOAL_KEY,
    IS_ENABLED_KEY,
    get_settings,
    init_db,
    upsert_setting,
)


logger = logging.getLogger(__name__)

SET_GOAL = "SET_GOAL"
SET_ENABLED = "SET_ENABLED"

StateListener = Callable[[Dict[str, Any]], None]


class SettingsHub:
    """
    Stores settings and broadcasts changes.

    Features:
    - Request/response messages (GET_STATE, SET_GOAL, SET_ENABLED)
    - Push notifications (GOAL_UPDATED, TOGGLE_CHANGED) to all subscribers
    - A failing subscriber never prevents delivery to the others
    """

    def __init__(self, db_path: str = ":memory:", conn: Optional[sqlite3.Connection] = None):
        """
        Initialize the hub.

        Args:
            db_path: Path to SQLite database
            conn: Existing connection (takes precedence over db_path)
        """
        self.db_path = db_path
        self.conn = conn or init_db(db_path)
        self._listeners: List[StateListener] = []

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    # Message protocol

    async def handle_message(self, message: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Handle one protocol message.

        Args:
            message: Dict with a "type" key and its payload

        Returns:
            Response dict, or None for unknown messages
        """
        message_type = message.get("type") if isinstance(message, dict) else None

        if message_type == GET_STATE:
            return self.get_state().to_response()

        if message_type == SET_GOAL:
            self.set_goal(message.get("goal") or "")
            return {"success": True}

        if message_type == SET_ENABLED:
            self.set_enabled(message.get("isEnabled") is not False)
            return {"success": True}

        return None

    def get_state(self) -> FocusState:
        settings = get_settings(self.conn)
        goal = settings.get(FOCUS_GOAL_KEY) or ""

        return FocusState(
            goal=goal if isinstance(goal, str) else "",
            enabled=settings.get(IS_ENABLED_KEY) is not False,
        )

    def set_goal(self, goal: str) -> None:
        """Persist a new goal and notify subscribers."""
        upsert_setting(self.conn, FOCUS_GOAL_KEY, goal)
        self._broadcast({"type": GOAL_UPDATED, "goal": goal})

    def set_enabled(self, enabled: bool) -> None:
        """Persist the enabled flag and notify subscribers."""
        upsert_setting(self.conn, IS_ENABLED_KEY, bool(enabled))
        self._broadcast({"type": TOGGLE_CHANGED, "isEnabled": bool(enabled)})

    # Engine-facing interface

    async def fetch_state(self) -> Optional[FocusState]:
        return FocusState.from_response(await self.handle_message({"type": GET_STATE}))

    def on_state_change(self, callback: StateListener) -> Callable[[], None]:
        """
        Subscribe to push notifications.

        Returns:
            Function removing the subscription
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def _broadcast(self, message: Dict[str, Any]) -> None:
        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception as e:
                # Subscribers without a working engine are ignored
                logger.warning("Failed to notify subscriber of %s: %s", message["type"], e)
