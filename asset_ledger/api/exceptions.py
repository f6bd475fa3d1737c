"""
Errors raised by the asset ledger itself.

Transport failures and non-2xx responses are not wrapped: they reach callers as the
requests exceptions (ConnectionError, Timeout, HTTPError) that produced them.
"""


class ApiLedgerError(Exception):
    """Base class for errors originating in this package"""


class PaginationLimitExceeded(ApiLedgerError):
    """A paginated endpoint kept returning continuation links past the page budget"""

    def __init__(self, endpoint: str, max_pages: int, records_seen: int):
        self.endpoint = endpoint
        self.max_pages = max_pages
        self.records_seen = records_seen
        super().__init__(
            f"Pagination of '{endpoint}' did not terminate within {max_pages} pages "
            f"({records_seen} records fetched)"
        )


class ValidationError(ApiLedgerError, ValueError):
    """Form input could not be coerced into a backend payload"""
