"""
Postgres backing store for captured artifacts.

Tables:
  artifacts  — one row per captured snapshot

Captures and purges are written through immediately so the archive
survives restarts. Image payloads are stored as the data URL / base64 text
the client sent.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any

import psycopg2
import psycopg2.extras

import config

log = logging.getLogger(__name__)

# ── Connection ────────────────────────────────────────────────────────

_pool: list[Any] = []


def _get_conn():
    """Get a Postgres connection (simple single-connection reuse)."""
    if _pool:
        conn = _pool[0]
        if not conn.closed:
            return conn
        _pool.clear()

    conn = psycopg2.connect(config.DATABASE_URL)
    conn.autocommit = True
    _pool.append(conn)
    return conn


@contextmanager
def get_cursor():
    """Yield a dict cursor."""
    conn = _get_conn()
    cur = conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)
    try:
        yield cur
    finally:
        cur.close()


# ── Schema ────────────────────────────────────────────────────────────

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS artifacts (
    id              TEXT PRIMARY KEY,
    mode            TEXT NOT NULL,
    bits            TEXT NOT NULL,
    weight          DOUBLE PRECISION NOT NULL,
    captured_at     TEXT NOT NULL,
    image_data      TEXT NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT now()
);

CREATE INDEX IF NOT EXISTS idx_artifacts_mode ON artifacts(mode);
"""


def init_db():
    """Create tables if they don't exist."""
    try:
        with get_cursor() as cur:
            cur.execute(SCHEMA_SQL)
        log.info("Database schema initialized")
    except Exception as e:
        log.error("Failed to initialize database: %s", e)
        raise


# ── Artifact CRUD ─────────────────────────────────────────────────────

def insert_artifact(artifact: dict) -> None:
    with get_cursor() as cur:
        cur.execute("""
            INSERT INTO artifacts (id, mode, bits, weight, captured_at, image_data)
            VALUES (%(id)s, %(mode)s, %(bits)s, %(weight)s, %(captured_at)s, %(image_data)s)
            ON CONFLICT (id) DO NOTHING
        """, {
            "id": artifact["id"],
            "mode": artifact["mode"],
            "bits": artifact["bits"],
            "weight": artifact["weight"],
            "captured_at": artifact["timestamp"],
            "image_data": artifact["image_data"],
        })


def delete_artifact(artifact_id: str) -> bool:
    with get_cursor() as cur:
        cur.execute("DELETE FROM artifacts WHERE id = %s", (artifact_id,))
        return cur.rowcount > 0


def list_artifacts(limit: int = 100) -> list[dict]:
    """List artifacts, newest first."""
    with get_cursor() as cur:
        cur.execute(
            "SELECT * FROM artifacts ORDER BY created_at DESC LIMIT %s",
            (limit,),
        )
        return [dict(row) for row in cur.fetchall()]
