"""
Asset Service
Presentation service for assets stored by the backend's `assets/` resource.

Handles:
- Listing every asset through the pagination aggregator
- Coercing the asset form into a backend payload
- The derived line total (quantity x rate) and the summed asset value
"""

from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from asset_ledger.api.client import ApiClient
from asset_ledger.api.exceptions import ValidationError
from asset_ledger.api.pagination import fetch_all
from asset_ledger.logger import get_logger
from asset_ledger.utils.numbers import parse_decimal, to_money

logger = get_logger("asset_ledger.services.asset_service")

CHECKBOX_ON = ('on', 'true', '1', 'yes', 'y')


class AssetService:
    """
    Service for asset screens.

    Provides methods for:
    - Reading the asset list and single assets
    - Creating, updating and deleting assets
    - Computing display totals
    """

    ENDPOINT = 'assets/'

    def __init__(self, client: ApiClient, max_pages: Optional[int] = None):
        self.client = client
        self.max_pages = max_pages

    @classmethod
    def detail_path(cls, asset_id) -> str:
        return f"{cls.ENDPOINT}{asset_id}/"

    def list_assets(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """All assets in backend order"""
        assets = fetch_all(self.client, self.ENDPOINT, params, max_pages=self.max_pages)
        logger.info(f"Loaded {len(assets)} assets")
        return assets

    def get_asset(self, asset_id) -> Dict[str, Any]:
        return self.client.get(self.detail_path(asset_id)).data

    def create_asset(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        created = self.client.post(self.ENDPOINT, json=payload).data
        logger.info(f"Created asset '{payload.get('item')}'")
        return created

    def update_asset(self, asset_id, payload: Dict[str, Any]) -> Dict[str, Any]:
        updated = self.client.put(self.detail_path(asset_id), json=payload).data
        logger.info(f"Updated asset {asset_id}")
        return updated

    def delete_asset(self, asset_id) -> None:
        self.client.delete(self.detail_path(asset_id))
        logger.info(f"Deleted asset {asset_id}")

    @staticmethod
    def compute_total(quantity: Any, rate: Any) -> Optional[str]:
        """
        Line total for an asset.

        Returns:
            quantity x rate with two decimals ("12.50"), or None if either input is not numeric
        """
        qty = parse_decimal(quantity)
        price = parse_decimal(rate)
        if qty is None or price is None:
            return None
        return str(to_money(qty * price))

    @staticmethod
    def build_payload(form: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Convert submitted asset form fields into the backend payload.

        Raises:
            ValidationError: item is blank, or quantity/rate are not numbers
        """
        item = (form.get('item') or '').strip()
        if not item:
            raise ValidationError("Asset item is required.")

        quantity = parse_decimal(form.get('quantity'))
        if quantity is None:
            raise ValidationError("Quantity must be a number.")

        rate = parse_decimal(form.get('rate'))
        if rate is None:
            raise ValidationError("Rate must be a number.")

        total = to_money(quantity * rate)

        return {
            'item': item,
            'description': form.get('description') or '',
            'quantity': float(quantity),
            'rate': float(rate),
            'total_amount': float(total),
            'is_active': str(form.get('is_active', '')).lower() in CHECKBOX_ON,
        }

    @staticmethod
    def form_values(asset: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Field values used to prefill the asset form"""
        if not asset:
            return {
                'item': '',
                'description': '',
                'quantity': '',
                'rate': '',
                'total_amount': '',
                'is_active': True,
            }
        return {
            'item': asset.get('item', ''),
            'description': asset.get('description') or '',
            'quantity': asset.get('quantity', ''),
            'rate': asset.get('rate', ''),
            'total_amount': asset.get('total_amount', ''),
            'is_active': bool(asset.get('is_active', True)),
        }

    @staticmethod
    def total_asset_value(assets: List[Mapping[str, Any]]) -> Decimal:
        """
        Sum of total_amount across assets.

        Amounts may arrive as numbers or numeric strings; missing or
        unparseable amounts count as zero.
        """
        total = Decimal(0)
        for asset in assets:
            amount = parse_decimal(asset.get('total_amount'))
            if amount is not None:
                total += amount
        return to_money(total)
