from flask import Flask, render_template
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
import requests
from asset_ledger.logger import get_logger
from asset_ledger.api.client import ApiClient, DEFAULT_TIMEOUT_MS

# Initialize extensions
csrf = CSRFProtect()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "300 per hour"],
    storage_uri="memory://"  # Use Redis in production for distributed systems
)

TRUTHY = ('true', '1', 'yes', 'on')


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in TRUTHY


def _optional_int(value):
    if value in (None, ''):
        return None
    return int(value)


def create_app(api_client=None, config=None):
    """
    Build the Flask application.

    Args:
        api_client: Pre-built ApiClient; by default one is created from API_BASE_URL
        config: Mapping applied over the environment-derived configuration
    """
    from pathlib import Path

    base_dir = Path(__file__).parent
    template_folder = str(base_dir / 'presentation' / 'templates')
    static_folder = str(base_dir / 'presentation' / 'static')

    app = Flask(__name__,
                template_folder=template_folder,
                static_folder=static_folder)

    logger = get_logger("asset_ledger")
    logger.info("Initializing Flask application")

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')
    app.config['API_BASE_URL'] = os.environ.get('API_BASE_URL')
    app.config['API_TIMEOUT_MS'] = int(os.environ.get('API_TIMEOUT_MS', str(DEFAULT_TIMEOUT_MS)))
    app.config['PAGINATION_MAX_PAGES'] = _optional_int(os.environ.get('PAGINATION_MAX_PAGES'))

    # HTTPS/TLS Configuration
    # Default to True (secure) for production - only disable for development
    app.config['ENABLE_HTTPS'] = _env_flag('ENABLE_HTTPS', 'True')
    app.config['FORCE_HTTPS_REDIRECT'] = _env_flag('FORCE_HTTPS_REDIRECT', 'True')

    # Session cookie security configuration
    app.config['SESSION_COOKIE_SECURE'] = _env_flag('SESSION_COOKIE_SECURE', 'True')
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

    if config:
        app.config.update(config)

    # SECURITY: Require SECRET_KEY - no fallback
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if app.config['PAGINATION_MAX_PAGES'] is not None and app.config['PAGINATION_MAX_PAGES'] < 1:
        logger.critical(f"PAGINATION_MAX_PAGES must be a positive integer, got {app.config['PAGINATION_MAX_PAGES']}")
        raise RuntimeError("PAGINATION_MAX_PAGES must be at least 1 when set")

    if api_client is None:
        if not app.config['API_BASE_URL']:
            logger.critical("API_BASE_URL not set in environment! Application cannot start.")
            raise RuntimeError("API_BASE_URL environment variable is required")
        api_client = ApiClient(app.config['API_BASE_URL'], timeout_ms=app.config['API_TIMEOUT_MS'])
    app.extensions['api_client'] = api_client

    logger.info(f"Backend API: {app.config['API_BASE_URL']} (timeout {app.config['API_TIMEOUT_MS']} ms)")
    if app.config['PAGINATION_MAX_PAGES'] is not None:
        logger.info(f"Pagination limited to {app.config['PAGINATION_MAX_PAGES']} pages per list")

    if app.config['ENABLE_HTTPS']:
        logger.info("HTTPS enforcement enabled")
        if app.config['FORCE_HTTPS_REDIRECT']:
            logger.info("Automatic HTTP to HTTPS redirect enabled")
    else:
        logger.warning("HTTPS enforcement DISABLED - Acceptable for development only!")

    # Initialize extensions with app
    csrf.init_app(app)
    limiter.init_app(app)

    logger.debug("Extensions initialized")

    from asset_ledger.presentation.routes import init_app as init_routes
    init_routes(app)

    from asset_ledger.utils.numbers import format_money
    app.jinja_env.filters['money'] = format_money

    @app.errorhandler(requests.RequestException)
    def backend_unavailable(error):
        """Backend failures that a route did not handle itself"""
        logger.error(f"Backend request failed: {type(error).__name__}: {error}")
        return render_template('error.html', error_type=type(error).__name__), 502

    # Add HTTPS redirect before request processing
    @app.before_request
    def enforce_https():
        """Redirect HTTP requests to HTTPS if HTTPS enforcement is enabled"""
        if app.config.get('ENABLE_HTTPS') and app.config.get('FORCE_HTTPS_REDIRECT'):
            from flask import request, redirect

            if not request.is_secure and not request.headers.get('X-Forwarded-Proto') == 'https':
                url = request.url.replace('http://', 'https://', 1)
                return redirect(url, code=301)

    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:;"
        )

        if app.config.get('ENABLE_HTTPS'):
            # max-age=31536000 (1 year), includeSubDomains applies to all subdomains
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    logger.info("Flask application initialization complete")

    return app
