from library_api.extensions import db
from library_api.models.book import Book
from library_api.models.filters import BookFilter
from library_api.utils.decorators import storage_call
from library_api.utils.pagination import Page, PageRequest


class BookRepo:
    @staticmethod
    @storage_call
    def exists_by_isbn(isbn: str) -> bool:
        return db.session.query(Book.query.filter_by(isbn=isbn).exists()).scalar()

    @staticmethod
    @storage_call
    def find_by_isbn(isbn: str):
        return Book.query.filter_by(isbn=isbn).first()

    @staticmethod
    @storage_call
    def find_by_id(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    @storage_call
    def save(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    @storage_call
    def delete(book: Book):
        db.session.delete(book)
        db.session.commit()

    @staticmethod
    @storage_call
    def find_by_filter(book_filter: BookFilter, page_request: PageRequest) -> Page:
        query = Book.query
        # case-sensitive LIKE on SQLite is switched on in db_setup
        if book_filter.title:
            query = query.filter(Book.title.contains(book_filter.title, autoescape=True))
        if book_filter.author:
            query = query.filter(Book.author.contains(book_filter.author, autoescape=True))

        pagination = query.order_by(Book.id.asc()).paginate(
            page=page_request.page + 1,
            per_page=page_request.size,
            error_out=False,
        )
        return Page.from_pagination(pagination, page_request)
