"""Book catalog operations."""
from __future__ import annotations

import logging
from typing import Optional

from library_catalog.core.errors import NotFound, StorageConflict, ValidationError
from library_catalog.db import sqlite as sqlite_db
from library_catalog.models.book import Book, BookCreate, BookUpdate

logger = logging.getLogger(__name__)


def _not_found(book_id: int) -> NotFound:
    return NotFound(f"Book with ID {book_id} not found")


# PUBLIC_INTERFACE
def list_books() -> list[Book]:
    with sqlite_db.get_conn() as conn:
        rows = sqlite_db.list_books(conn)
    return [Book(**r) for r in rows]


# PUBLIC_INTERFACE
def get_book(book_id: int) -> Book:
    with sqlite_db.get_conn() as conn:
        row = sqlite_db.get_book(conn, book_id)
    if row is None:
        raise _not_found(book_id)
    return Book(**row)


# PUBLIC_INTERFACE
def create_book(data: BookCreate, actor: Optional[str] = None) -> Book:
    """Persist a new book and return it with its assigned id."""
    fields = data.model_dump(include={"title", "author", "description"})
    with sqlite_db.get_conn() as conn:
        book_id = sqlite_db.insert_book(conn, fields)
    logger.info("Book %s created by user %s", book_id, actor)
    return Book(id=book_id, **fields)


# PUBLIC_INTERFACE
def update_book(book_id: int, data: BookUpdate, actor: Optional[str] = None) -> None:
    """Overwrite a book's fields.

    Raises:
        ValidationError: If the body id differs from book_id; nothing is written.
        NotFound: If the book does not exist when the write lands.
        StorageConflict: If the write touched no row although the book exists.
    """
    if data.id != book_id:
        raise ValidationError("ID mismatch")

    fields = data.model_dump(include={"title", "author", "description"})
    with sqlite_db.get_conn() as conn:
        affected = sqlite_db.update_book(conn, book_id, fields)
        if affected == 0:
            if not sqlite_db.book_exists(conn, book_id):
                raise _not_found(book_id)
            raise StorageConflict(f"Book with ID {book_id} changed during update")
    logger.info("Book %s updated by user %s", book_id, actor)


# PUBLIC_INTERFACE
def delete_book(book_id: int, actor: Optional[str] = None) -> None:
    with sqlite_db.get_conn() as conn:
        if sqlite_db.get_book(conn, book_id) is None:
            raise _not_found(book_id)
        sqlite_db.delete_book(conn, book_id)
    logger.info("Book %s deleted by user %s", book_id, actor)
