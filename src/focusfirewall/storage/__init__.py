"""
Storage layer for Focus Firewall.

Handles persistent settings including:
- SQLite key-value storage of the focus goal and enabled flag
- Relaying setting changes to running engines
"""

from .sqlite import (
    init_db,
    get_setting,
    get_settings,
    upsert_setting,
    get_updated_at,
    FOCUS_GOAL_KEY,
    IS_ENABLED_KEY,
)
from .hub import SettingsHub, SET_GOAL, SET_ENABLED

__all__ = [
    "init_db",
    "get_setting",
    "get_settings",
    "upsert_setting",
    "get_updated_at",
    "FOCUS_GOAL_KEY",
    "IS_ENABLED_KEY",
    "SettingsHub",
    "SET_GOAL",
    "SET_ENABLED",
]
