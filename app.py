import logging

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException

from config.bd import Database, UniqueViolation
from config.settings import load_settings
from init_db import initialize_database
from logic.auth import auth_bp, register_jwt_callbacks
from logic.errors import ApiError
from logic.floors import floors_bp
from logic.outlets import outlets_bp
from logic.rooms import rooms_bp
from logic.storage.store_factory import get_store
from logic.uploads import ensure_uploads_directory

logger = logging.getLogger(__name__)


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_mapping(load_settings(overrides))

    CORS(app, origins=app.config["CORS_ORIGINS"])

    # JWT configuration
    jwt = JWTManager(app)
    register_jwt_callbacks(jwt)

    # One pool per process; handlers reach the store through current_app
    app.db = Database(app.config["DATABASE_URL"])
    app.store = get_store(app.config["STORAGE_BACKEND"], app.db)

    ensure_uploads_directory(app.config["UPLOADS_DIR"])
    if app.config["RUN_INIT_DB"]:
        initialize_database(app)

    for blueprint in (auth_bp, outlets_bp, floors_bp, rooms_bp):
        app.register_blueprint(blueprint, url_prefix="/api")

    register_error_handlers(app)

    @app.route("/", methods=["GET"])
    def home():
        return jsonify({
            "message": "Room management backend is running.",
            "jwtConfigured": bool(app.config.get("JWT_SECRET_KEY")),
        })

    @app.route("/uploads/<path:filename>", methods=["GET"])
    def uploaded_file(filename):
        return send_from_directory(app.config["UPLOADS_DIR"], filename)

    return app


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(UniqueViolation)
    def handle_unique_violation(e):
        logger.info("Unique constraint rejected a write: %s", e)
        return jsonify({"message": "Resource already exists."}), 409

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        # Global error handler; internals stay in the log
        logger.exception("Unhandled error in backend")
        return jsonify({"message": "Internal server error."}), 500


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == '__main__':
    # Handlers must exist before create_app logs schema and seed steps
    settings = load_settings()
    configure_logging(settings["LOG_LEVEL"])
    application = create_app(settings)
    application.run(host='0.0.0.0', port=application.config["PORT"])
