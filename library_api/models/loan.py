import enum
from datetime import date

from sqlalchemy import text

from library_api.extensions import db
from library_api.models.book import Book  # noqa: F401


class LoanStatus(enum.Enum):
    OUTSTANDING = "outstanding"
    RETURNED = "returned"

    @classmethod
    def from_returned(cls, returned) -> "LoanStatus":
        # null and false both mean the book is still out
        return cls.RETURNED if returned is True else cls.OUTSTANDING


class Loan(db.Model):
    __tablename__ = "loans"

    id = db.Column(db.Integer, primary_key=True)

    # no FK constraint: returned loans outlive a deleted book
    book_id = db.Column(db.Integer, nullable=False, index=True)

    customer = db.Column(db.String(200), nullable=False, index=True)
    customer_email = db.Column(db.String(255), nullable=True)

    loan_date = db.Column(db.Date, nullable=False, default=date.today, index=True)
    # active_history: the previous status is always known when it changes
    status = db.column_property(
        db.Column(
            db.Enum(LoanStatus, name="loan_status"),
            nullable=False,
            default=LoanStatus.OUTSTANDING,
        ),
        active_history=True,
    )

    book = db.relationship("Book", primaryjoin="foreign(Loan.book_id) == Book.id")

    __table_args__ = (
        # at most one outstanding loan per book
        db.Index(
            "uq_loans_outstanding_book",
            "book_id",
            unique=True,
            sqlite_where=text("status = 'OUTSTANDING'"),
            postgresql_where=text("status = 'OUTSTANDING'"),
        ),
    )

    @property
    def returned(self) -> bool:
        return self.status is LoanStatus.RETURNED

    @returned.setter
    def returned(self, value):
        self.status = LoanStatus.from_returned(value)

    def __repr__(self):
        return f"<Loan id={self.id} book_id={self.book_id} status={self.status}>"
