"""
Engine module for Focus Firewall.

Handles the long-running side of filtering:
- Focus state and its synchronization with the settings store
- Debounced rescans on page mutations and navigation
"""

from .state import FocusState
from .sync import GoalStateSync, StateStore, GET_STATE, GOAL_UPDATED, TOGGLE_CHANGED
from .watcher import ChangeWatcher
from .filter import FocusFilter

__all__ = [
    "FocusState",
    "GoalStateSync",
    "StateStore",
    "GET_STATE",
    "GOAL_UPDATED",
    "TOGGLE_CHANGED",
    "ChangeWatcher",
    "FocusFilter",
]
