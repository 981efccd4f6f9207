from flask import Flask, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from app.config import Config, engine_options
from app.errors import CatalogError
from app.extensions import db, migrate, jwt


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(config_object, dict):
        app.config.update(config_object)
    elif config_object is not None:
        app.config.from_object(config_object)

    app.config.setdefault(
        "SQLALCHEMY_ENGINE_OPTIONS",
        engine_options(app.config["SQLALCHEMY_DATABASE_URI"], app.config["STORE_TIMEOUT_SECONDS"]),
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # 1) db first, models must be mapped before create_all
    db.init_app(app)
    from app.models.user import User  # noqa: F401
    from app.models.book import Book  # noqa: F401

    # 2) store unreachable at boot is fatal
    with app.app_context():
        try:
            db.create_all()
        except SQLAlchemyError as e:
            app.logger.critical(f"[startup] catalog store unreachable: {e}")
            raise

    # 3) other extensions
    migrate.init_app(app, db)
    jwt.init_app(app)
    _register_jwt_loaders()
    _register_error_handlers(app)

    # 4) API blueprints
    from app.controllers.auth_controller import auth_bp
    from app.controllers.book_controller import book_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(book_bp, url_prefix="/books")

    @app.get("/health")
    def health():
        try:
            db.session.execute(text("SELECT 1"))
            db_ok = True
        except SQLAlchemyError as e:
            db.session.rollback()
            app.logger.warning(f"[health] database check failed: {e}")
            db_ok = False
        return jsonify({"success": True, "status": "ok", "database": db_ok})

    return app


def _unauthorized(message):
    return jsonify({"success": False, "message": message}), 401


def _register_jwt_loaders():
    @jwt.unauthorized_loader
    def _missing_token(reason):
        return _unauthorized("Not authorized, no token")

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return _unauthorized("Not authorized, token failed")

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _unauthorized("Not authorized, token expired")


def _register_error_handlers(app: Flask):
    @app.errorhandler(CatalogError)
    def _catalog_error(e: CatalogError):
        body = {"success": False, "message": e.message}
        if app.debug and e.detail:
            body["error"] = e.detail
        return jsonify(body), e.status_code

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify({"success": False, "message": e.description}), e.code

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        app.logger.exception(f"[app] unhandled error: {e}")
        db.session.rollback()
        body = {"success": False, "message": "Something went wrong!"}
        if app.debug:
            body["error"] = str(e)
        return jsonify(body), 500
