"""SQLite database helper and simple repositories for users and books.

Controls:
- Use parameterized queries.
- Ensure connections are closed via context managers.
- Avoid logging sensitive data.
- Create DB directory if missing; initialize schema on first connect.
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from library_catalog.core.config import get_settings


def _ensure_schema(conn: sqlite3.Connection) -> None:
    """Create the users and books tables if they do not exist."""
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS books (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            author TEXT NOT NULL,
            description TEXT NOT NULL
        );
        """
    )
    conn.commit()


@contextmanager
def get_conn() -> Iterator[sqlite3.Connection]:
    settings = get_settings()
    db_path = Path(settings.db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    # Use check_same_thread=False to prevent thread-affinity errors under TestClient's worker threads.
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    try:
        _ensure_schema(conn)
        yield conn
    finally:
        conn.close()


def fetch_all(conn: sqlite3.Connection, query: str, params: Iterable[Any]) -> list[dict[str, Any]]:
    conn.row_factory = sqlite3.Row
    cur = conn.execute(query, list(params))
    rows = cur.fetchall()
    return [dict(r) for r in rows]


def fetch_one(conn: sqlite3.Connection, query: str, params: Iterable[Any]) -> Optional[dict[str, Any]]:
    conn.row_factory = sqlite3.Row
    cur = conn.execute(query, list(params))
    row = cur.fetchone()
    return dict(row) if row else None


def execute(conn: sqlite3.Connection, query: str, params: Iterable[Any]) -> sqlite3.Cursor:
    """Run a write statement and commit; the cursor exposes lastrowid/rowcount."""
    cur = conn.execute(query, list(params))
    conn.commit()
    return cur


# --- Users ---

def get_user_by_email(conn: sqlite3.Connection, email_norm: str) -> Optional[dict[str, Any]]:
    """Return user record by normalized email."""
    return fetch_one(conn, "SELECT * FROM users WHERE email = ?", (email_norm,))


def insert_user(conn: sqlite3.Connection, rec: dict[str, Any]) -> int:
    """Insert a new user and return its assigned id."""
    cur = execute(
        conn,
        "INSERT INTO users (name, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
        (rec["name"], rec["email"], rec["password_hash"], rec["created_at"]),
    )
    return int(cur.lastrowid)


# --- Books ---

def list_books(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    return fetch_all(conn, "SELECT id, title, author, description FROM books ORDER BY id", ())


def get_book(conn: sqlite3.Connection, book_id: int) -> Optional[dict[str, Any]]:
    return fetch_one(conn, "SELECT id, title, author, description FROM books WHERE id = ?", (book_id,))


def book_exists(conn: sqlite3.Connection, book_id: int) -> bool:
    return fetch_one(conn, "SELECT 1 AS present FROM books WHERE id = ?", (book_id,)) is not None


def insert_book(conn: sqlite3.Connection, rec: dict[str, Any]) -> int:
    """Insert a book and return its assigned id."""
    cur = execute(
        conn,
        "INSERT INTO books (title, author, description) VALUES (?, ?, ?)",
        (rec["title"], rec["author"], rec["description"]),
    )
    return int(cur.lastrowid)


def update_book(conn: sqlite3.Connection, book_id: int, rec: dict[str, Any]) -> int:
    """Overwrite a book's fields; returns the number of affected rows."""
    cur = execute(
        conn,
        "UPDATE books SET title = ?, author = ?, description = ? WHERE id = ?",
        (rec["title"], rec["author"], rec["description"], book_id),
    )
    return cur.rowcount


def delete_book(conn: sqlite3.Connection, book_id: int) -> int:
    cur = execute(conn, "DELETE FROM books WHERE id = ?", (book_id,))
    return cur.rowcount
