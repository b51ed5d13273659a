from flask import current_app
from sqlalchemy.exc import IntegrityError

from library_api.errors import BookHasOutstandingLoan, DuplicateIsbn, InvalidArgument
from library_api.extensions import db
from library_api.models.book import Book
from library_api.models.filters import BookFilter
from library_api.repositories.book_repo import BookRepo
from library_api.repositories.loan_repo import LoanRepo
from library_api.utils.pagination import Page, PageRequest


class BookService:
    @staticmethod
    def create(book: Book) -> Book:
        if BookRepo.exists_by_isbn(book.isbn):
            raise DuplicateIsbn()
        try:
            return BookRepo.save(book)
        except IntegrityError:
            # another request registered the same isbn in between
            db.session.rollback()
            raise DuplicateIsbn()

    @staticmethod
    def get_by_id(book_id):
        return BookRepo.find_by_id(book_id)

    @staticmethod
    def get_by_isbn(isbn):
        return BookRepo.find_by_isbn(isbn)

    @staticmethod
    def update(book: Book) -> Book:
        if book is None or book.id is None:
            raise InvalidArgument("Book id cant be null.")
        return BookRepo.save(book)

    @staticmethod
    def delete(book: Book):
        if book is None or book.id is None:
            raise InvalidArgument("Book id cant be null.")
        if LoanRepo.exists_by_book_and_not_returned(book):
            current_app.logger.info(f"[book_service] delete refused, book {book.id} is on loan")
            raise BookHasOutstandingLoan()
        BookRepo.delete(book)

    @staticmethod
    def find(book_filter: BookFilter, page_request: PageRequest) -> Page:
        return BookRepo.find_by_filter(book_filter or BookFilter(), page_request)
