"""Book catalog endpoints. Every route requires a valid bearer token."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from library_catalog.models.auth import TokenClaims
from library_catalog.models.book import Book, BookCreate, BookUpdate
from library_catalog.security.gate import require_token
from library_catalog.services import catalog

router = APIRouter(prefix="/book", tags=["book"], dependencies=[Depends(require_token)])


# PUBLIC_INTERFACE
@router.get("/getAllBooks", response_model=List[Book], summary="List books", description="Return every book in the catalog.")
def get_all_books():
    return catalog.list_books()


# PUBLIC_INTERFACE
@router.get("/getBook/{book_id}", response_model=Book, summary="Get book", description="Return one book by id.")
def get_book(book_id: int):
    """Return a book, or 404 if it does not exist."""
    return catalog.get_book(book_id)


# PUBLIC_INTERFACE
@router.post(
    "/addBook",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    summary="Add book",
    description="Create a book; the response carries a Location header for the new record.",
)
def add_book(
    payload: BookCreate,
    request: Request,
    response: Response,
    claims: TokenClaims = Depends(require_token),
):
    book = catalog.create_book(payload, actor=claims.sub)
    response.headers["Location"] = str(request.url_for("get_book", book_id=book.id))
    return book


# PUBLIC_INTERFACE
@router.put(
    "/updateBook/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update book",
    description="Replace a book's fields. The body id must match the path id.",
)
def update_book(book_id: int, payload: BookUpdate, claims: TokenClaims = Depends(require_token)):
    """Update a book.

    Returns:
        204 on success.
        400 on id mismatch or invalid fields.
        404 if the book does not exist.
    """
    catalog.update_book(book_id, payload, actor=claims.sub)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.delete("/deleteBook/{book_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete book", description="Remove a book by id.")
def delete_book(book_id: int, claims: TokenClaims = Depends(require_token)):
    catalog.delete_book(book_id, actor=claims.sub)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
