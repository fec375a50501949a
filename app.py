"""
Brewery Search Gateway

Read-only search over the brewery API collections (inventory, orders,
users, reviews) with local filtering, caller scoping and pagination.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config import Settings
from routes import main_bp, search_bp
from services import BreweryClient, SearchService

LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'


def configure_logging(app: Flask, settings: Settings):
    """Attach the rotating file handler to the app and module loggers"""
    level = getattr(logging, settings.log_level, logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    app.logger.setLevel(level)

    if not settings.log_to_file:
        return

    os.makedirs(settings.log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(settings.log_dir, 'search.log'))
    # create_app may run more than once per process
    for existing in root.handlers:
        if isinstance(existing, RotatingFileHandler) and existing.baseFilename == log_path:
            return

    handler = RotatingFileHandler(log_path, maxBytes=10000000, backupCount=3)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    root.addHandler(handler)


def create_app(settings: Settings = None, brewery_client=None) -> Flask:
    """
    Build the Flask application

    Args:
        settings: Gateway settings (default: read from the environment)
        brewery_client: Upstream client override (default: BreweryClient for settings)

    Returns:
        Configured Flask app with `search_service` attached
    """
    if settings is None:
        settings = Settings.from_env()

    app = Flask(__name__)
    app.config.update(
        ENVIRONMENT=settings.environment,
        JWT_SECRET=settings.jwt_secret,
        RESPONSE_FIELD_CASE=settings.response_field_case,
        RATELIMIT_ENABLED=settings.rate_limit_enabled,
    )
    CORS(app)
    configure_logging(app, settings)

    Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        storage_uri="memory://"
    )

    if brewery_client is None:
        brewery_client = BreweryClient(settings.brewery_api_url, timeout=settings.upstream_timeout)
    app.search_service = SearchService(
        brewery_client,
        allow_anonymous_orders=settings.allow_anonymous_orders,
        forward_auth_token=settings.forward_auth_token,
    )

    app.register_blueprint(main_bp)
    app.register_blueprint(search_bp, url_prefix='/search')

    if not settings.jwt_secret:
        app.logger.warning('JWT_SECRET not set - bearer tokens are not verified, all callers are anonymous')
    app.logger.info('Search gateway startup')
    return app


if __name__ == '__main__':
    settings = Settings.from_env()
    create_app(settings).run(host='0.0.0.0', port=settings.port, debug=settings.environment == 'development')
