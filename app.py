import logging

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException
from config.config import Config
from database.db import db, migrate

# Import all blueprints
from routes.auth_routes import auth_bp
from routes.chatbot_routes import chatbot_bp
from routes.ticket_routes import tickets_bp
from routes.admin_routes import admin_bp

from time import time


def create_app(config_object=Config):
    """Flask app factory for the helpdesk chat service"""
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(chatbot_bp, url_prefix="/chatbot")
    app.register_blueprint(tickets_bp, url_prefix="/tickets")
    app.register_blueprint(admin_bp, url_prefix="/admin")

    with app.app_context():
        import models.storage_model  # noqa: F401
        db.create_all()

    @app.route("/")
    def index():
        return jsonify({"ok": True, "service": "helpdesk"})

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({"ok": False, "error": e.name}), e.code

    # API Request Logging
    @app.before_request
    def _start_timer():
        request._start_time = time()

    @app.after_request
    def _log_api(response):
        latency = (time() - getattr(request, "_start_time", time())) * 1000.0

        from utils.audit import log_api_request
        log_api_request(
            path=request.path,
            method=request.method,
            status_code=response.status_code,
            latency_ms=latency,
        )

        return response

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
