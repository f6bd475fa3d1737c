"""
Service construction for request handlers.
Services receive the ApiClient built once in create_app.
"""

from flask import current_app

from asset_ledger.services.asset_service import AssetService
from asset_ledger.services.income_service import IncomeService


def api_client():
    return current_app.extensions['api_client']


def asset_service() -> AssetService:
    return AssetService(api_client(), max_pages=current_app.config.get('PAGINATION_MAX_PAGES'))


def income_service() -> IncomeService:
    return IncomeService(api_client(), max_pages=current_app.config.get('PAGINATION_MAX_PAGES'))
