"""
Pagination aggregator.

Collection endpoints answer in one of two shapes:

- a bare JSON array holding every record, or
- an envelope ``{"results": [...], "next": "<absolute url>" | null}``
  (some endpoints use ``items`` instead of ``results``).

Each page body is parsed once into a BareList or a Wrapped page, and fetch_all
follows ``next`` links until the collection is exhausted.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from asset_ledger.api.exceptions import PaginationLimitExceeded
from asset_ledger.logger import get_logger
from asset_ledger.utils.logging_sanitizer import sanitize_url

logger = get_logger("asset_ledger.api.pagination")

# Envelope fields holding a page's records, in order of preference
RECORD_FIELDS = ('results', 'items')
NEXT_FIELD = 'next'


@dataclass(frozen=True)
class BareList:
    """A page that is itself the complete record sequence"""
    records: List[Any]


@dataclass(frozen=True)
class Wrapped:
    """A page envelope with its records and an optional link to the next page"""
    records: List[Any]
    next_url: Optional[str] = None


PageResponse = Union[BareList, Wrapped]


def parse_page(body: Any) -> PageResponse:
    """
    Classify a page body.

    Records come from the first recognized field holding a list; an envelope
    with neither field contributes no records. Empty strings count as no
    continuation.
    """
    if isinstance(body, list):
        return BareList(records=body)

    if not isinstance(body, dict):
        return Wrapped(records=[])

    records = []
    for field in RECORD_FIELDS:
        value = body.get(field)
        if isinstance(value, list):
            records = value
            break

    return Wrapped(records=records, next_url=body.get(NEXT_FIELD) or None)


def fetch_all(client, endpoint: str, params: Optional[Dict[str, Any]] = None,
              max_pages: Optional[int] = None) -> List[Any]:
    """
    Fetch every record of a collection endpoint, following continuation links.

    Pages are requested one at a time. The first request goes to ``endpoint``
    relative to the client's base address; continuation links are absolute
    and requested as-is. Any failure aborts the whole fetch and nothing
    collected so far is returned.

    Args:
        client: ApiClient (anything with a compatible ``get``)
        endpoint: Collection path, e.g. "incomes/"
        params: Query parameters for the first request
        max_pages: Page budget; None means follow links for as long as the backend sends them

    Returns:
        All records in backend order

    Raises:
        PaginationLimitExceeded: more than max_pages pages were needed
    """
    if max_pages is not None and max_pages < 1:
        raise ValueError("max_pages must be at least 1")

    response = client.get(endpoint, params=params or {})
    page = parse_page(response.data)

    if isinstance(page, BareList):
        logger.debug(f"{endpoint}: unpaginated response with {len(page.records)} records")
        return page.records

    results = list(page.records)
    next_url = page.next_url
    pages = 1

    while next_url:
        if max_pages is not None and pages >= max_pages:
            logger.error(f"{endpoint}: still paginating after {pages} pages, last link {sanitize_url(next_url)}")
            raise PaginationLimitExceeded(endpoint, max_pages, len(results))

        response = client.get(next_url, absolute=True)
        page = parse_page(response.data)
        results.extend(page.records)
        next_url = page.next_url if isinstance(page, Wrapped) else None
        pages += 1

    logger.debug(f"{endpoint}: fetched {len(results)} records over {pages} page(s)")
    return results
