"""
Goal/toggle synchronization for Focus Firewall.

Seeds the engine's focus state from the settings store at startup and
applies push notifications (GOAL_UPDATED, TOGGLE_CHANGED) with an
immediate, non-debounced scan.
"""

import asyncio
import dataclasses
import logging
from typing import Any, Callable, Dict, Optional, Protocol

from ..classify.run import ScanCoordinator
from .state import FocusState


logger = logging.getLogger(__name__)

GET_STATE = "GET_STATE"
GOAL_UPDATED = "GOAL_UPDATED"
TOGGLE_CHANGED = "TOGGLE_CHANGED"

StateListener = Callable[[Dict[str, Any]], None]


class StateStore(Protocol):
    """What the engine needs from the settings store."""

    async def fetch_state(self) -> Optional[FocusState]:
        ...

    def on_state_change(self, callback: StateListener) -> Callable[[], None]:
        ...


class GoalStateSync:
    """
    Owns the engine's FocusState.

    The store may be unavailable: failures leave the defaults in place
    (no goal, enabled) and are never retried; the next push corrects them.
    """

    def __init__(
        self,
        coordinator: ScanCoordinator,
        store: Optional[StateStore] = None,
        timeout_seconds: float = 2.0,
    ):
        """
        Initialize the sync.

        Args:
            coordinator: Scan coordinator driven on every state change
            store: Settings store (None means "never available")
            timeout_seconds: How long a GET_STATE may stay unanswered
        """
        self.coordinator = coordinator
        self.store = store
        self.timeout_seconds = timeout_seconds

        self.state = FocusState()
        self.seeded = False
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def start(self) -> bool:
        """
        Subscribe to push notifications and seed state from the store.

        Returns:
            True if state was obtained and the startup scan ran
        """
        if self.store is None:
            logger.warning("No settings store; running with default state")
            return False

        if self._unsubscribe is None:
            self._unsubscribe = self.store.on_state_change(self.handle_message)

        try:
            fetched = await asyncio.wait_for(self.store.fetch_state(), self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("Settings store did not answer within %.1fs", self.timeout_seconds)
            return False
        except Exception as e:
            logger.warning("Settings store unavailable: %s", e)
            return False

        if not isinstance(fetched, FocusState):
            logger.warning("Settings store returned no state")
            return False

        self.state = fetched
        self.seeded = True
        self.scan()
        return True

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def handle_message(self, message: Dict[str, Any]) -> None:
        """
        Apply a push notification from the store.

        Args:
            message: {"type": "GOAL_UPDATED", "goal": ...} or
                {"type": "TOGGLE_CHANGED", "isEnabled": ...}
        """
        if not isinstance(message, dict):
            return

        message_type = message.get("type")

        if message_type == GOAL_UPDATED:
            goal = message.get("goal") or ""
            self.state = dataclasses.replace(self.state, goal=str(goal))
            logger.debug("Goal updated: %r", self.state.goal)
            self.scan()

        elif message_type == TOGGLE_CHANGED:
            enabled = bool(message.get("isEnabled"))
            self.state = dataclasses.replace(self.state, enabled=enabled)
            logger.debug("Filtering %s", "enabled" if enabled else "disabled")
            if not enabled:
                self.coordinator.clear_all()
            else:
                self.scan()

    def scan(self) -> Dict[str, int]:
        """Run one scan with the current state snapshot."""
        state = self.state
        return self.coordinator.scan(state.keywords, state.enabled)
