"""
Backend API layer.
The configured HTTP client and the pagination aggregator that every screen reads through.
"""

from asset_ledger.api.client import ApiClient, ApiResponse
from asset_ledger.api.exceptions import ApiLedgerError, PaginationLimitExceeded, ValidationError
from asset_ledger.api.pagination import fetch_all, parse_page, BareList, Wrapped

__all__ = [
    'ApiClient',
    'ApiResponse',
    'ApiLedgerError',
    'PaginationLimitExceeded',
    'ValidationError',
    'fetch_all',
    'parse_page',
    'BareList',
    'Wrapped',
]
