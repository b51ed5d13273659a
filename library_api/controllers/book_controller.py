# library_api/controllers/book_controller.py

from flask import Blueprint, request, jsonify

from library_api.errors import BookHasOutstandingLoan, BusinessError, InvalidArgument
from library_api.models.filters import BookFilter
from library_api.services.book_service import BookService
from library_api.services.loan_service import LoanService
from library_api.utils.pagination import PageRequest
from library_api.utils.serializers import (
    BOOK_REQUIRED_FIELDS,
    apply_book_changes,
    book_from_dict,
    book_to_dict,
    loan_to_dict,
    missing_fields,
    page_to_dict,
)

book_bp = Blueprint("books", __name__, url_prefix="/api/books")


def _not_found():
    return jsonify({"success": False, "message": "Book not found."}), 404


@book_bp.post("")
def create_book():
    data = request.get_json(silent=True) or {}
    errors = missing_fields(data, BOOK_REQUIRED_FIELDS)
    if errors:
        return jsonify({"success": False, "message": "Validation failed.", "errors": errors}), 400
    try:
        b = BookService.create(book_from_dict(data))
        return jsonify({"success": True, "data": book_to_dict(b)}), 201
    except BusinessError as e:
        return jsonify({"success": False, "message": str(e)}), 400


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    b = BookService.get_by_id(book_id)
    if not b:
        return _not_found()
    return jsonify({"success": True, "data": book_to_dict(b)})


@book_bp.put("/<int:book_id>")
def update_book(book_id: int):
    data = request.get_json(silent=True) or {}
    b = BookService.get_by_id(book_id)
    if not b:
        return _not_found()

    errors = missing_fields(data, ("title", "author"))
    if errors:
        return jsonify({"success": False, "message": "Validation failed.", "errors": errors}), 400

    b = BookService.update(apply_book_changes(b, data))
    return jsonify({"success": True, "data": book_to_dict(b)})


@book_bp.delete("/<int:book_id>")
def delete_book(book_id: int):
    b = BookService.get_by_id(book_id)
    if not b:
        return _not_found()
    try:
        BookService.delete(b)
        return "", 204
    except BookHasOutstandingLoan as e:
        return jsonify({"success": False, "message": str(e)}), 409


@book_bp.get("")
def find_books():
    try:
        page_request = PageRequest.from_args(request.args)
    except InvalidArgument as e:
        return jsonify({"success": False, "message": str(e)}), 400

    book_filter = BookFilter(
        title=request.args.get("title") or None,
        author=request.args.get("author") or None,
    )
    page = BookService.find(book_filter, page_request)
    return jsonify({"success": True, **page_to_dict(page, book_to_dict)})


@book_bp.get("/<int:book_id>/loans")
def loans_by_book(book_id: int):
    b = BookService.get_by_id(book_id)
    if not b:
        return _not_found()
    try:
        page_request = PageRequest.from_args(request.args)
    except InvalidArgument as e:
        return jsonify({"success": False, "message": str(e)}), 400

    page = LoanService.get_loans_by_book(b, page_request)
    return jsonify({"success": True, **page_to_dict(page, loan_to_dict)})
