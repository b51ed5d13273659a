from datetime import date

from flask import Blueprint, request, jsonify

from library_api.errors import BusinessError, InvalidArgument
from library_api.models.filters import LoanFilter
from library_api.models.loan import Loan, LoanStatus
from library_api.services.book_service import BookService
from library_api.services.loan_service import LoanService
from library_api.utils.pagination import PageRequest
from library_api.utils.serializers import LOAN_REQUIRED_FIELDS, loan_to_dict, missing_fields, page_to_dict

loan_bp = Blueprint("loans", __name__, url_prefix="/api/loans")


@loan_bp.post("")
def create_loan():
    data = request.get_json(silent=True) or {}
    errors = missing_fields(data, LOAN_REQUIRED_FIELDS)
    if errors:
        return jsonify({"success": False, "message": "Validation failed.", "errors": errors}), 400

    book = BookService.get_by_isbn(str(data["isbn"]).strip())
    if not book:
        return jsonify({"success": False, "message": "Book not found for passed isbn."}), 400

    loan = Loan(
        book=book,
        customer=str(data["customer"]).strip(),
        customer_email=str(data.get("email") or "").strip() or None,
        loan_date=date.today(),
        status=LoanStatus.OUTSTANDING,
    )
    try:
        loan = LoanService.save(loan)
        return jsonify({"success": True, "id": loan.id}), 201
    except BusinessError as e:
        return jsonify({"success": False, "message": str(e)}), 400


@loan_bp.get("/<int:loan_id>")
def get_loan(loan_id: int):
    loan = LoanService.get_by_id(loan_id)
    if not loan:
        return jsonify({"success": False, "message": "Loan not found."}), 404
    return jsonify({"success": True, "data": loan_to_dict(loan)})


@loan_bp.patch("/<int:loan_id>")
def return_book(loan_id: int):
    data = request.get_json(silent=True) or {}
    # returning is the only change a loan accepts
    if data.get("returned") is not True:
        return jsonify({"success": False, "message": "returned must be true"}), 400

    loan = LoanService.return_loan(loan_id)
    if not loan:
        return jsonify({"success": False, "message": "Loan not found."}), 404
    return jsonify({"success": True, "data": loan_to_dict(loan)})


@loan_bp.get("")
def find_loans():
    try:
        page_request = PageRequest.from_args(request.args)
    except InvalidArgument as e:
        return jsonify({"success": False, "message": str(e)}), 400

    loan_filter = LoanFilter(
        isbn=request.args.get("isbn") or None,
        customer=request.args.get("customer") or None,
    )
    page = LoanService.find(loan_filter, page_request)
    return jsonify({"success": True, **page_to_dict(page, loan_to_dict)})
