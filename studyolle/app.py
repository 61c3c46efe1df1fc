"""
StudyOlle - account settings service
Application factory and initialization
"""
import logging
import os
import sys

import structlog
from flask import Flask

from studyolle.auth import init_accounts, init_auth
from studyolle.constants import BUILD_VERSION, CONFIG_DIR, STUDYOLLE_DB
from studyolle.db import db, init_db, migrate
from studyolle.exceptions import register_exception_handlers
from studyolle.routes.settings import settings_bp
from studyolle.settings import load_settings
from studyolle.utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs, get_or_create_secret_key

logger = structlog.get_logger('main')


def configure_logging(level=logging.INFO):
    formatter = ColoredFormatter(
        '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[handler]
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if os.environ.get('LOG_FORMAT') == 'json' else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Apply filter to hide date from http access logs
    logging.getLogger('werkzeug').addFilter(FilterRemoveDateFromWerkzeugLogs())


def create_app(test_config=None):
    """Application factory"""
    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = STUDYOLLE_DB
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SETTINGS_FILE'] = None

    if test_config is not None:
        app.config.update(test_config)

    if not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = get_or_create_secret_key(CONFIG_DIR)

    if not app.config.get('TESTING'):
        configure_logging()

    load_settings(force=True, config_file=app.config['SETTINGS_FILE'])

    # Initialize components
    db.init_app(app)
    migrate.init_app(app, db)
    init_auth(app)

    register_exception_handlers(app)

    app.register_blueprint(settings_bp)

    init_db(app)
    init_accounts(app)

    logger.info(f'Build Version: {BUILD_VERSION}')
    return app


if __name__ == '__main__':
    app = create_app()
    logger.info('Starting server on port 8080...')
    app.run(debug=False, use_reloader=False, host="0.0.0.0", port=8080)
