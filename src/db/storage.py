# src/db/storage.py
"""
Persisted key-value store.

Values are stored as raw strings; callers own the encoding (JSON for the
user registry and the current session). Every write overwrites its key.
"""
from __future__ import annotations

from typing import Dict, Optional

from db.database import connect


async def get_item(key: str) -> Optional[str]:
    """Return the stored value for key, or None if absent."""
    async with connect() as conn:
        cur = await conn.execute("SELECT value FROM kv WHERE key = ?;", (key,))
        row = await cur.fetchone()
        await cur.close()
    return row[0] if row else None


async def set_item(key: str, value: str) -> None:
    """Insert or overwrite the value stored under key."""
    async with connect() as conn:
        await conn.execute(
            "INSERT INTO kv(key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value;",
            (key, value),
        )
        await conn.commit()


async def remove_item(key: str) -> None:
    """Delete key; no-op if it is not stored."""
    async with connect() as conn:
        await conn.execute("DELETE FROM kv WHERE key = ?;", (key,))
        await conn.commit()


async def all_items() -> Dict[str, str]:
    async with connect() as conn:
        cur = await conn.execute("SELECT key, value FROM kv ORDER BY key;")
        rows = await cur.fetchall()
        await cur.close()
    return {row[0]: row[1] for row in rows}


async def clear() -> None:
    """Remove every key."""
    async with connect() as conn:
        await conn.execute("DELETE FROM kv;")
        await conn.commit()
