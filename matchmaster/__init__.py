"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from .core import constants
from .extensions import core


def _init_firebase(app):
    """Initialize the Firebase Admin SDK from env, file, or default credentials."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    # If both methods fail, fallback to default credentials
    if not cred:
        try:
            cred = credentials.ApplicationDefault()
            project_id = os.environ.get("FIREBASE_PROJECT_ID")
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )

    if cred and not firebase_admin._apps:
        try:
            options = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, options)
        except ValueError:
            # This can happen if the app is already initialized, which is fine.
            app.logger.info("Firebase app already initialized.")


def create_app(test_config=None, store=None, audit_log=None, identity=None):
    """Create and configure an instance of the Flask application.

    ``store``, ``audit_log`` and ``identity`` replace the components that
    would otherwise be built from configuration.
    """
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        STORE_BACKEND=(
            os.environ.get("STORE_BACKEND") or constants.STORE_BACKEND_FIRESTORE
        ).lower(),
        ADMIN_LOG_PAGE_SIZE=int(
            os.environ.get("ADMIN_LOG_PAGE_SIZE") or constants.ADMIN_LOG_PAGE_SIZE
        ),
        ADMIN_LOG_MAX_PAGE_SIZE=int(
            os.environ.get("ADMIN_LOG_MAX_PAGE_SIZE")
            or constants.ADMIN_LOG_MAX_PAGE_SIZE
        ),
        LOG_LEVEL=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
    )

    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    if app.config["STORE_BACKEND"] not in (
        constants.STORE_BACKEND_FIRESTORE,
        constants.STORE_BACKEND_MEMORY,
    ):
        raise ValueError(f"Unknown STORE_BACKEND: {app.config['STORE_BACKEND']}")

    # Firebase Auth verifies tokens for every backend; skip it only in tests.
    if not app.config.get("TESTING"):
        _init_firebase(app)

    core.init_app(app, store=store, audit_log=audit_log, identity=identity)

    # Register blueprints
    from . import tournament as tournament_bp

    app.register_blueprint(tournament_bp.bp)

    from . import admin as admin_bp

    app.register_blueprint(admin_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return {"status": "ok", "store": app.config["STORE_BACKEND"]}, 200

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
