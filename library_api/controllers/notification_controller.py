from flask import Blueprint, current_app, jsonify

from library_api.tasks.late_loans import run_late_loans_job

notif_bp = Blueprint("notifications", __name__, url_prefix="/api/notifications")


@notif_bp.post("/run-late-check")
def run_late_check():
    recipients = run_late_loans_job(current_app._get_current_object())
    return jsonify({"success": True, "message": "Late check executed.", "notified": len(recipients)})
