"""
Flask application factory and initialization.
"""
import os
import logging
from flask import Flask
from flask_session import Session
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from redis import Redis
from redis.exceptions import RedisError

from authapp.config import config_by_name

# Initialize extensions
session = Session()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"],
    storage_uri="memory://"
)


def get_redis_client(redis_url):
    """Get Redis client if one is configured and reachable, otherwise return None."""
    if not redis_url or 'redis://' not in redis_url:
        return None
    try:
        client = Redis.from_url(redis_url)
        client.ping()
        return client
    except RedisError as e:
        logging.getLogger(__name__).warning(f'Redis unavailable at {redis_url}: {e}')
        return None


def create_app(config_name=None):
    """
    Application factory pattern.
    Creates and configures the Flask application.
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__,
                template_folder='templates',
                static_folder='static')

    # Load configuration
    app.config.from_object(config_by_name.get(config_name, config_by_name['default']))

    # Configure logging
    configure_logging(app)

    # Try Redis, fallback to filesystem sessions
    redis_client = get_redis_client(app.config['REDIS_URL'])
    if redis_client:
        app.config['SESSION_TYPE'] = 'redis'
        app.config['SESSION_REDIS'] = redis_client
        app.logger.info('Using Redis for sessions')
    else:
        app.config['SESSION_TYPE'] = 'filesystem'
        app.config['SESSION_FILE_DIR'] = os.path.join(app.instance_path, 'sessions')
        os.makedirs(app.config['SESSION_FILE_DIR'], exist_ok=True)
        app.logger.info('Using filesystem for sessions (Redis not available)')

    session.init_app(app)
    limiter.init_app(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        for header, value in app.config.get('SECURITY_HEADERS', {}).items():
            response.headers[header] = value
        return response

    @app.context_processor
    def inject_app_settings():
        return {
            'app_name': app.config['APP_NAME'],
            'signin_url': app.config['SIGNIN_URL'],
            'signup_url': app.config['SIGNUP_URL'],
        }

    app.logger.info(f'{app.config["APP_NAME"]} started in {config_name} mode')

    return app


def configure_logging(app):
    """Configure application logging."""
    log_level = getattr(logging, app.config['LOG_LEVEL'])
    handlers = []

    if app.config.get('LOG_FILE'):
        # Create logs directory if it doesn't exist
        log_dir = os.path.dirname(app.config['LOG_FILE'])
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # File handler
        file_handler = logging.FileHandler(app.config['LOG_FILE'])
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        handlers.append(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    handlers.append(console_handler)

    # app.logger ('authapp.main') and the module loggers all propagate here
    package_logger = logging.getLogger('authapp')
    for handler in handlers:
        handler.setLevel(log_level)
        package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    app.logger.setLevel(log_level)


def register_blueprints(app):
    """Register Flask blueprints."""
    from authapp.routes.auth import auth_bp
    from authapp.routes.main import main_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/api/auth')


def register_error_handlers(app):
    """Register error handlers."""
    from flask import render_template, jsonify

    @app.errorhandler(404)
    def not_found(error):
        if app.config['FLASK_ENV'] == 'development':
            return jsonify({'error': 'Not found'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f'Internal error: {error}')
        if app.config['FLASK_ENV'] == 'development':
            return jsonify({'error': 'Internal server error'}), 500
        return render_template('errors/500.html'), 500

    @app.errorhandler(429)
    def ratelimit_handler(error):
        app.logger.warning(f'Rate limit exceeded: {error}')
        return jsonify({'error': 'Rate limit exceeded. Please try again later.'}), 429
