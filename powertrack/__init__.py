from pathlib import Path

from flask import Flask
from werkzeug.exceptions import HTTPException

from .clock import utcnow
from .errors import DuplicateRecordError, StoreError, ValidationError


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # Basis-Konfiguration, dann instance/config.py; Test-Config überschreibt alles
    app.config.from_object("powertrack.config")
    app.config.from_mapping(CLOCK=utcnow)
    if test_config is None:
        app.config.from_pyfile("config.py", silent=True)
    else:
        app.config.update(test_config)

    if not app.config.get("DATABASE"):
        app.config["DATABASE"] = str(Path(app.instance_path) / "powertrack.db")

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Instance-Ordner sicherstellen
    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    from . import db
    db.init_app(app)

    from .seed import seed_demo_command
    app.cli.add_command(seed_demo_command)

    _register_error_handlers(app)

    # Healthcheck
    @app.get("/health")
    def health():
        db.get_db().execute("SELECT 1")
        return {"status": "ok"}

    # Blueprints registrieren
    from .blueprints.schedule import bp as schedule_bp
    app.register_blueprint(schedule_bp)

    from .blueprints.metrics import bp as metrics_bp
    app.register_blueprint(metrics_bp)

    from .blueprints.progress import bp as progress_bp
    app.register_blueprint(progress_bp)

    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def validation_error(exc: ValidationError):
        return {"error": "validation", "fields": exc.errors}, 400

    @app.errorhandler(DuplicateRecordError)
    def duplicate_record(exc: DuplicateRecordError):
        app.logger.error("uniqueness violated: %s", exc)
        return {"error": "duplicate", "message": str(exc)}, 409

    @app.errorhandler(StoreError)
    def store_error(exc: StoreError):
        app.logger.warning("store error: %s (%r)", exc, exc.cause)
        return {"error": "store", "message": f"{exc}. Please try again."}, 503

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        return {"error": exc.name, "message": exc.description}, exc.code
