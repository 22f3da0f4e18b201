import logging

from flask import Flask

from feed_api.config import Config
from feed_api.db import db
from feed_api.errors import register_error_handlers
from feed_api.extensions.extensions import cors, jwt, ma


def _configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.from_mapping(test_config)

    _configure_logging(app)

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    cors.init_app(app, resources={r"/*": {"origins": app.config["CORS_ALLOWED_ORIGINS"]}})

    from feed_api.routes.auth_routes import auth_bp
    from feed_api.routes.feed_routes import feed_bp
    from feed_api.routes.media_routes import media_bp

    app.register_blueprint(feed_bp, url_prefix="/feed")
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(media_bp)
    register_error_handlers(app)

    with app.app_context():
        from feed_api.models import post_model, user_model  # noqa: F401

        db.create_all()

    return app
