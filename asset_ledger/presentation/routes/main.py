"""
Main routes for the Asset Ledger admin
Landing page and health check
"""

from flask import Blueprint, render_template, jsonify, current_app
from asset_ledger.logger import get_logger

logger = get_logger("asset_ledger.routes.main")
main = Blueprint('main', __name__)


@main.route('/')
def index():
    """Landing page linking the asset and income screens"""
    logger.debug("Main index page accessed")
    return render_template('index.html')


@main.route('/health')
def health():
    """Liveness probe; does not contact the backend"""
    return jsonify({
        'status': 'ok',
        'api_base_url': current_app.config.get('API_BASE_URL'),
    })
