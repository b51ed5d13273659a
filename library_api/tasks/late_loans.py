# library_api/tasks/late_loans.py
from flask import current_app

from library_api.extensions import db
from library_api.services.loan_service import LoanService
from library_api.services.mail_service import MailService


def collect_recipients(loans):
    recipients = []
    for loan in loans:
        if loan.customer_email:
            recipients.append(loan.customer_email)
        else:
            current_app.logger.warning(f"[late_loans] loan {loan.id} has no customer email, skipped")
    return recipients


def run_late_loans_job(app):
    """
    Sends the late-loan message to every customer holding an overdue loan.
    - overdue: outstanding and loan_date older than LOAN_OVERDUE_DAYS
    - no dedup: a loan still late tomorrow is notified again
    - no recipients: the mail call is skipped
    Returns the recipient list that was handed to the mailer.
    """
    with app.app_context():
        try:
            late_loans = LoanService.get_all_late_loans()
            recipients = collect_recipients(late_loans)

            if not recipients:
                current_app.logger.info(f"[late_loans] overdue={len(late_loans)} nothing to send")
                return []

            MailService.send_mails(current_app.config["LATE_LOANS_MESSAGE"], recipients)
            current_app.logger.info(
                f"[late_loans] overdue={len(late_loans)} recipients={len(recipients)}"
            )
            return recipients

        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"[late_loans] Error: {e}")
            return []
