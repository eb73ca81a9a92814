"""Catalog DTOs."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

TITLE_MAX = 200
AUTHOR_MAX = 100
DESCRIPTION_MAX = 1000


class BookBase(BaseModel):
    """Writable book fields, all required and length bounded."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX, description="Book title")
    author: str = Field(..., min_length=1, max_length=AUTHOR_MAX, description="Author name")
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX, description="Short description")

    @field_validator("title", "author", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class BookCreate(BookBase):
    """Payload for addBook; any id in the body is ignored."""


class BookUpdate(BookBase):
    """Payload for updateBook; id must equal the path id."""
    id: Optional[int] = Field(None, description="Book identifier, must match the path")


class Book(BookBase):
    """Stored book."""
    id: int = Field(..., description="Book identifier")
