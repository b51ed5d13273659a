"""Explicit field-by-field conversion between models and JSON payloads."""
from __future__ import annotations

from library_api.models.book import Book
from library_api.models.loan import Loan
from library_api.utils.pagination import Page

BOOK_REQUIRED_FIELDS = ("title", "author", "isbn")
LOAN_REQUIRED_FIELDS = ("isbn", "customer")


def _clean(data: dict, key: str):
    value = data.get(key)
    if isinstance(value, str):
        value = value.strip()
    elif value is not None:
        value = str(value)
    return value or None


def missing_fields(data: dict, required) -> list[str]:
    return [f"{k} is required" for k in required if not _clean(data, k)]


def book_to_dict(book: Book) -> dict:
    return {
        "id": book.id,
        "isbn": book.isbn,
        "title": book.title,
        "author": book.author,
    }


def book_from_dict(data: dict) -> Book:
    return Book(
        isbn=_clean(data, "isbn"),
        title=_clean(data, "title"),
        author=_clean(data, "author"),
    )


def apply_book_changes(book: Book, data: dict) -> Book:
    # isbn is the business key and stays as registered
    if "title" in data:
        book.title = _clean(data, "title")
    if "author" in data:
        book.author = _clean(data, "author")
    return book


def loan_to_dict(loan: Loan) -> dict:
    book = loan.book
    return {
        "id": loan.id,
        "customer": loan.customer,
        "email": loan.customer_email,
        "loan_date": loan.loan_date.isoformat() if loan.loan_date else None,
        "returned": loan.returned,
        "book": book_to_dict(book) if book else None,
    }


def page_to_dict(page: Page, item_to_dict) -> dict:
    return {
        "content": [item_to_dict(x) for x in page.items],
        "page": page.page,
        "size": page.size,
        "total_elements": page.total,
        "total_pages": page.total_pages,
    }
