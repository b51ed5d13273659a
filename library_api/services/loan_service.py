from __future__ import annotations

from datetime import date, timedelta

from flask import current_app
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from library_api.errors import BookAlreadyLoaned, InvalidArgument
from library_api.extensions import db
from library_api.models.book import Book
from library_api.models.filters import LoanFilter
from library_api.models.loan import Loan, LoanStatus
from library_api.repositories.loan_repo import LoanRepo
from library_api.utils.pagination import Page, PageRequest


class LoanService:
    @staticmethod
    def save(loan: Loan) -> Loan:
        """
        Persist a new loan unless its book is already out.

        The pre-check covers the common case; the partial unique index on
        outstanding loans catches two requests racing for the same book.
        """
        if LoanRepo.exists_by_book_and_not_returned(loan.book):
            current_app.logger.info(f"[loan_service] book {loan.book.id} already loaned")
            raise BookAlreadyLoaned()
        try:
            return LoanRepo.save(loan)
        except IntegrityError:
            db.session.rollback()
            current_app.logger.info(f"[loan_service] concurrent loan rejected for book {loan.book.id}")
            raise BookAlreadyLoaned()

    @staticmethod
    def get_by_id(loan_id):
        return LoanRepo.find_by_id(loan_id)

    @staticmethod
    def update(loan: Loan) -> Loan:
        if loan is None or loan.id is None:
            raise InvalidArgument("Loan id cant be null.")
        # a returned loan is closed for good
        previous = inspect(loan).attrs.status.history.deleted
        if LoanStatus.RETURNED in previous and loan.status is not LoanStatus.RETURNED:
            db.session.rollback()
            raise InvalidArgument("Returned loan cant be reopened.")
        try:
            return LoanRepo.save(loan)
        except IntegrityError:
            db.session.rollback()
            current_app.logger.info(f"[loan_service] update rejected, book {loan.book_id} already loaned")
            raise BookAlreadyLoaned()

    @staticmethod
    def return_loan(loan_id):
        loan = LoanRepo.find_by_id(loan_id)
        if not loan:
            return None
        loan.status = LoanStatus.RETURNED
        return LoanService.update(loan)

    @staticmethod
    def find(loan_filter: LoanFilter, page_request: PageRequest) -> Page:
        loan_filter = loan_filter or LoanFilter()
        return LoanRepo.find_by_isbn_or_customer(loan_filter.isbn, loan_filter.customer, page_request)

    @staticmethod
    def get_loans_by_book(book: Book, page_request: PageRequest) -> Page:
        return LoanRepo.find_by_book(book, page_request)

    @staticmethod
    def late_cutoff(today: date | None = None) -> date:
        days = int(current_app.config.get("LOAN_OVERDUE_DAYS", 4))
        return (today or date.today()) - timedelta(days=days)

    @staticmethod
    def get_all_late_loans():
        return LoanRepo.find_overdue_unreturned(LoanService.late_cutoff())
