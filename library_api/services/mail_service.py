from __future__ import annotations

from flask import current_app
from flask_mail import Message

from library_api.extensions import mail


class MailService:
    @staticmethod
    def send_mails(message: str, recipients: list[str], subject: str | None = None) -> bool:
        """
        Sends one message to every recipient in a single batch.
        Fire-and-forget: delivery errors are logged, never raised.
        return: success
        """
        if subject is None:
            subject = current_app.config.get("LATE_LOANS_SUBJECT", "Book with overdue loan.")
        try:
            msg = Message(subject=subject, recipients=list(recipients), body=message)
            mail.send(msg)
            current_app.logger.info(f"[MailService] Mail sent to {len(recipients)} recipient(s).")
            return True
        except Exception as e:
            current_app.logger.warning(f"[MailService] Mail could not be sent: {e}")
            return False
