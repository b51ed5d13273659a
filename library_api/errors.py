"""Error kinds raised by the lending core.

Business-rule violations subclass ``ValueError`` so controllers can keep
catching them the same way they catch bad input. Absence ("not found") is
never an exception: lookups return ``None``.
"""


class LibraryError(Exception):
    default_message = "Library error."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class BusinessError(LibraryError, ValueError):
    default_message = "Business rule violated."


class DuplicateIsbn(BusinessError):
    default_message = "Isbn already registered."


class BookAlreadyLoaned(BusinessError):
    default_message = "Book already loaned."


class BookHasOutstandingLoan(BusinessError):
    default_message = "Book has an outstanding loan."


class InvalidArgument(LibraryError, ValueError):
    default_message = "Invalid argument."


class StorageUnavailable(LibraryError):
    default_message = "Storage unavailable."
