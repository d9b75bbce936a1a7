"""
SQLite storage layer for Focus Firewall.

Provides:
- Database initialization with default settings
- Key-value settings storage (focus goal, enabled flag)
"""

import sqlite3
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional


FOCUS_GOAL_KEY = "focusGoal"
IS_ENABLED_KEY = "isEnabled"

DEFAULT_SETTINGS = {
    FOCUS_GOAL_KEY: "",
    IS_ENABLED_KEY: True,
}


def init_db(db_path: str) -> sqlite3.Connection:
    """
    Initialize SQLite database with required tables.

    Creates the settings table if it doesn't exist and seeds the default
    settings on first run. Existing values are never overwritten.

    Args:
        db_path: Path to SQLite database file (":memory:" for tests)

    Returns:
        sqlite3.Connection: Database connection
    """
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """)

    now = datetime.utcnow().isoformat()
    for key, value in DEFAULT_SETTINGS.items():
        conn.execute(
            "INSERT OR IGNORE INTO settings (key, value, updated_at) VALUES (?, ?, ?)",
            (key, json.dumps(value), now),
        )

    conn.commit()
    return conn


def get_setting(conn: sqlite3.Connection, key: str, default: Any = None) -> Any:
    """
    Retrieve a single setting.

    Args:
        conn: Database connection
        key: Setting name

    Returns:
        Decoded value, or default if the key is missing or unreadable
    """
    row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()

    if row is None:
        return default

    try:
        return json.loads(row[0])
    except json.JSONDecodeError:
        return default


def get_settings(conn: sqlite3.Connection) -> Dict[str, Any]:
    """Retrieve all settings as a dict."""
    settings = dict(DEFAULT_SETTINGS)

    for key, value in conn.execute("SELECT key, value FROM settings"):
        try:
            settings[key] = json.loads(value)
        except json.JSONDecodeError:
            continue

    return settings


def upsert_setting(conn: sqlite3.Connection, key: str, value: Any) -> None:
    """
    Update or insert a setting.

    Args:
        conn: Database connection
        key: Setting name
        value: JSON-serializable value
    """
    now = datetime.utcnow().isoformat()

    conn.execute("""
        INSERT INTO settings (key, value, updated_at)
        VALUES (?, ?, ?)
        ON CONFLICT (key) DO UPDATE SET
            value = excluded.value,
            updated_at = excluded.updated_at
    """, (key, json.dumps(value), now))

    conn.commit()


def get_updated_at(conn: sqlite3.Connection, key: str) -> Optional[str]:
    """Return when a setting was last written (ISO8601), if it exists."""
    row = conn.execute("SELECT updated_at FROM settings WHERE key = ?", (key,)).fetchone()
    return row[0] if row else None
