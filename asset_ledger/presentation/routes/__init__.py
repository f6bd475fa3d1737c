"""
Routes package for the Asset Ledger admin
One blueprint per screen, all reading and writing through the backend API
"""

from asset_ledger.logger import get_logger

logger = get_logger("asset_ledger.routes")


def init_app(app):
    """Register all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .main import main
    from . import assets, incomes

    app.register_blueprint(main)
    app.register_blueprint(assets.bp, url_prefix='/assets')
    app.register_blueprint(incomes.bp, url_prefix='/incomes')

    logger.info("All route blueprints registered successfully")
