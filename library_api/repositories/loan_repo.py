from datetime import date

from sqlalchemy import false, or_

from library_api.extensions import db
from library_api.models.book import Book
from library_api.models.loan import Loan, LoanStatus
from library_api.utils.decorators import storage_call
from library_api.utils.pagination import Page, PageRequest


class LoanRepo:
    @staticmethod
    @storage_call
    def exists_by_book_and_not_returned(book: Book) -> bool:
        q = Loan.query.filter_by(book_id=book.id, status=LoanStatus.OUTSTANDING)
        return db.session.query(q.exists()).scalar()

    @staticmethod
    @storage_call
    def find_by_id(loan_id: int):
        return db.session.get(Loan, loan_id)

    @staticmethod
    @storage_call
    def save(loan: Loan):
        db.session.add(loan)
        db.session.commit()
        return loan

    @staticmethod
    @storage_call
    def find_by_isbn_or_customer(isbn, customer, page_request: PageRequest) -> Page:
        criteria = []
        if isbn:
            criteria.append(Book.isbn == isbn)
        if customer:
            criteria.append(Loan.customer == customer)

        # outer join: loans of a deleted book still match by customer
        query = Loan.query.outerjoin(Book, Loan.book_id == Book.id)
        query = query.filter(or_(*criteria) if criteria else false())

        pagination = query.order_by(Loan.id.asc()).paginate(
            page=page_request.page + 1,
            per_page=page_request.size,
            error_out=False,
        )
        return Page.from_pagination(pagination, page_request)

    @staticmethod
    @storage_call
    def find_by_book(book: Book, page_request: PageRequest) -> Page:
        pagination = Loan.query.filter_by(book_id=book.id).order_by(Loan.id.asc()).paginate(
            page=page_request.page + 1,
            per_page=page_request.size,
            error_out=False,
        )
        return Page.from_pagination(pagination, page_request)

    @staticmethod
    @storage_call
    def find_overdue_unreturned(cutoff: date):
        return Loan.query.filter(
            Loan.status == LoanStatus.OUTSTANDING,
            Loan.loan_date <= cutoff
        ).order_by(Loan.id.asc()).all()
