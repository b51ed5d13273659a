from sqlalchemy import event

from library_api.extensions import db


def _sqlite_pragmas(dbapi_conn, _record):
    cursor = dbapi_conn.cursor()
    # substring filters on title/author are case-sensitive
    cursor.execute("PRAGMA case_sensitive_like = ON;")
    cursor.close()


def ensure_db_objects(app):
    """Creates tables plus the outstanding-loan unique index if missing."""
    # models must be imported so their tables are registered on db.metadata
    from library_api.models import book, loan  # noqa: F401

    with app.app_context():
        engine = db.engine
        if engine.dialect.name == "sqlite" and not event.contains(engine, "connect", _sqlite_pragmas):
            event.listen(engine, "connect", _sqlite_pragmas)

        if not app.config.get("AUTO_CREATE_TABLES", True):
            return
        try:
            db.create_all()
            app.logger.info("[db_setup] Tables and indexes ensured.")
        except Exception as e:
            app.logger.error(f"[db_setup] Error: {e}")
            raise
