from datetime import date

import pytest

from library_api import create_app
from library_api.extensions import db
from library_api.models.book import Book
from library_api.models.loan import Loan, LoanStatus
from library_api.repositories.book_repo import BookRepo
from library_api.repositories.loan_repo import LoanRepo

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "SCHEDULER_ENABLED": False,
    "MAIL_SUPPRESS_SEND": True,
    "LOAN_OVERDUE_DAYS": 4,
    "LATE_LOANS_MESSAGE": "You have a late loan.",
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_book(app):
    def _make(isbn="123", title="As Aventuras", author="Fulano"):
        return BookRepo.save(Book(isbn=isbn, title=title, author=author))
    return _make


@pytest.fixture
def make_loan(app):
    def _make(book, customer="Fulano", email="fulano@email.com", loan_date=None, returned=False):
        loan = Loan(
            book=book,
            customer=customer,
            customer_email=email,
            loan_date=loan_date or date.today(),
            status=LoanStatus.from_returned(returned),
        )
        return LoanRepo.save(loan)
    return _make


@pytest.fixture
def file_app(tmp_path):
    app = create_app({
        **TEST_CONFIG,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'library.db'}",
        "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"check_same_thread": False}},
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()
