from flask import Flask, jsonify

from library_api.config import Config
from library_api.errors import InvalidArgument, StorageUnavailable
from library_api.extensions import db, migrate, mail
from library_api.db_setup import ensure_db_objects


def _engine_options(app):
    options = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {})
    timeout = app.config.get("STORE_TIMEOUT_SECONDS")
    if timeout:
        if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
            connect_args = dict(options.get("connect_args") or {})
            connect_args.setdefault("timeout", timeout)
            options["connect_args"] = connect_args
        else:
            options.setdefault("pool_timeout", timeout)
    return options


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = _engine_options(app)

    # 1) db init first, everything below needs db.engine / db.session
    db.init_app(app)
    ensure_db_objects(app)

    # 2) other extensions
    migrate.init_app(app, db)
    mail.init_app(app)

    # 3) API blueprints
    from library_api.controllers.book_controller import book_bp
    from library_api.controllers.loan_controller import loan_bp
    from library_api.controllers.notification_controller import notif_bp
    app.register_blueprint(book_bp)
    app.register_blueprint(loan_bp)
    app.register_blueprint(notif_bp)

    @app.errorhandler(StorageUnavailable)
    def storage_unavailable(e):
        return jsonify({"success": False, "message": str(e)}), 503

    @app.errorhandler(InvalidArgument)
    def invalid_argument(e):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    # Scheduler (late loans sweep)
    from library_api.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
