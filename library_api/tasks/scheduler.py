# library_api/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from library_api.tasks.late_loans import run_late_loans_job

JOB_ID = "late_loans_job"


def start_scheduler(app):
    """
    Starts the daily late-loans sweep on a background thread.
    - Runs the job inside the app context.
    - Skips the Werkzeug reloader's watcher process in debug mode.
    - Registers stop_scheduler with atexit so the thread ends with the process.
    """
    if not app.config.get("SCHEDULER_ENABLED", True):
        app.logger.info("[scheduler] Disabled by config.")
        return None

    # Werkzeug reloader runs two processes; only the child has WERKZEUG_RUN_MAIN=true
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    existing = app.extensions.get("apscheduler")
    if existing is not None and existing.running:
        return existing

    timezone = app.config.get("SCHEDULER_TIMEZONE", "UTC")
    scheduler = BackgroundScheduler(timezone=timezone)

    hour = app.config.get("LATE_LOANS_CRON_HOUR", 0)
    minute = app.config.get("LATE_LOANS_CRON_MINUTE", 0)

    scheduler.add_job(
        func=run_late_loans_job,
        args=[app],
        trigger=CronTrigger(hour=hour, minute=minute, timezone=timezone),
        id=JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=3600,
    )

    scheduler.start()
    app.logger.info(f"[scheduler] Late loans job started (daily at {hour:02d}:{minute:02d}).")

    app.extensions["apscheduler"] = scheduler
    atexit.register(stop_scheduler, app)
    return scheduler


def stop_scheduler(app):
    scheduler = app.extensions.pop("apscheduler", None)
    if scheduler is not None and scheduler.running:
        scheduler.shutdown(wait=False)
        app.logger.info("[scheduler] Scheduler shutdown.")
