import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv

from tasktrack.errors import TaskPersistenceError


def create_app(overrides=None):
    load_dotenv(override=False)

    app = Flask(__name__)
    app.config.from_object("tasktrack.config.Config")
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # The browser client is served from another origin during development.
    CORS(app, resources={r"/*": {"origins": app.config["CORS_ORIGINS"]}})

    from tasktrack.utils.db import init_app as init_store

    init_store(app)

    from tasktrack.routes.task_routes import tasks_bp
    from tasktrack.routes.download_routes import downloads_bp

    app.register_blueprint(tasks_bp, url_prefix="/tasks")
    app.register_blueprint(downloads_bp, url_prefix="/download")

    @app.get("/health")
    def health():
        return jsonify(status="ok", service="Task Tracker API"), 200

    @app.errorhandler(TaskPersistenceError)
    def persistence_failed(exc):
        app.logger.exception("Task data could not be saved: %s", exc)
        return jsonify(error="Could not save tasks"), 500

    @app.errorhandler(404)
    def not_found(_):
        return jsonify(error="Not Found"), 404

    @app.errorhandler(413)
    def too_large(_):
        return jsonify(error="Uploaded file is too large"), 413

    @app.errorhandler(500)
    def server_error(_):
        return jsonify(error="Internal Server Error"), 500

    return app


if __name__ == "__main__":
    # Direct run support: python -m tasktrack.app
    create_app().run(
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "3000")),
        debug=os.environ.get("FLASK_DEBUG", "1") == "1",
    )
