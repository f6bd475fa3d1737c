"""
Income Service
Presentation service for daily income records (`incomes/`) and the ship and
project lookups (`ships/`, `projects/`) the income screens depend on.
"""

from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from asset_ledger.api.client import ApiClient
from asset_ledger.api.exceptions import ValidationError
from asset_ledger.api.pagination import fetch_all
from asset_ledger.logger import get_logger
from asset_ledger.services.asset_service import CHECKBOX_ON
from asset_ledger.utils.numbers import parse_decimal, to_money

logger = get_logger("asset_ledger.services.income_service")

UNKNOWN_SHIP = "N/A"


class IncomeService:
    """
    Service for the daily income screens.

    Provides methods for:
    - Reading incomes, ships and projects
    - Creating, updating and deleting incomes
    - Client-side filtering by ship and by month
    """

    ENDPOINT = 'incomes/'
    SHIPS_ENDPOINT = 'ships/'
    PROJECTS_ENDPOINT = 'projects/'

    def __init__(self, client: ApiClient, max_pages: Optional[int] = None):
        self.client = client
        self.max_pages = max_pages

    @classmethod
    def detail_path(cls, income_id) -> str:
        return f"{cls.ENDPOINT}{income_id}/"

    def list_incomes(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        incomes = fetch_all(self.client, self.ENDPOINT, params, max_pages=self.max_pages)
        logger.info(f"Loaded {len(incomes)} incomes")
        return incomes

    def list_ships(self) -> List[Dict[str, Any]]:
        return fetch_all(self.client, self.SHIPS_ENDPOINT, max_pages=self.max_pages)

    def list_projects(self) -> List[Dict[str, Any]]:
        return fetch_all(self.client, self.PROJECTS_ENDPOINT, max_pages=self.max_pages)

    def get_income(self, income_id) -> Dict[str, Any]:
        return self.client.get(self.detail_path(income_id)).data

    def create_income(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        created = self.client.post(self.ENDPOINT, json=payload).data
        logger.info(f"Created income for ship {payload.get('ship')} on {payload.get('date')}")
        return created

    def update_income(self, income_id, payload: Dict[str, Any]) -> Dict[str, Any]:
        updated = self.client.put(self.detail_path(income_id), json=payload).data
        logger.info(f"Updated income {income_id}")
        return updated

    def delete_income(self, income_id) -> None:
        self.client.delete(self.detail_path(income_id))
        logger.info(f"Deleted income {income_id}")

    @staticmethod
    def compute_amount(sand_rate: Any, sands_amount: Any) -> Optional[str]:
        """sand_rate x sands_amount with two decimals, or None if either is not numeric"""
        rate = parse_decimal(sand_rate, strip_commas=True)
        quantity = parse_decimal(sands_amount, strip_commas=True)
        if rate is None or quantity is None:
            return None
        return str(to_money(rate * quantity))

    @classmethod
    def build_payload(cls, form: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Convert submitted income form fields into the backend payload.

        The amount is derived from sand rate and sand quantity when both are
        numeric, otherwise taken from the amount field with thousands
        separators removed. It must be positive and is rounded to cents.
        A blank actual amount defaults to the amount.

        Raises:
            ValidationError: missing ship or date, non-positive amount, bad actual amount
        """
        ship = form.get('ship')
        if ship in (None, ''):
            raise ValidationError("Ship is required.")

        date = (form.get('date') or '').strip()
        if not date:
            raise ValidationError("Date is required.")

        computed = cls.compute_amount(form.get('sand_rate'), form.get('sands_amount'))
        raw_amount = computed if computed is not None else form.get('amount')
        amount = parse_decimal(raw_amount, strip_commas=True)
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be a positive number.")
        amount = to_money(amount)

        raw_actual = form.get('actual_amount')
        if raw_actual in (None, ''):
            actual_amount = amount
        else:
            actual_amount = parse_decimal(raw_actual, strip_commas=True)
            if actual_amount is None:
                raise ValidationError("Actual amount must be a number.")
            actual_amount = to_money(actual_amount)

        sand_rate = parse_decimal(form.get('sand_rate'), strip_commas=True)
        sands_amount = parse_decimal(form.get('sands_amount'), strip_commas=True)

        return {
            'ship': ship,
            'project': form.get('project') or None,
            'date': date,
            'sand_rate': float(sand_rate) if sand_rate is not None else None,
            'sands_amount': float(sands_amount) if sands_amount is not None else None,
            'amount': float(amount),
            'actual_amount': float(actual_amount),
            'description': form.get('description') or '',
            'is_active': str(form.get('is_active', '')).lower() in CHECKBOX_ON,
        }

    @staticmethod
    def form_values(income: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Field values used to prefill the income form"""
        income = income or {}
        return {
            'ship': income.get('ship') or '',
            'project': income.get('project') or '',
            'date': income.get('date') or '',
            'sand_rate': income.get('sand_rate') or '',
            'sands_amount': income.get('sands_amount') or '',
            'amount': income.get('amount') or '',
            'actual_amount': income.get('actual_amount') or '',
            'description': income.get('description') or '',
            'is_active': bool(income.get('is_active', True)),
        }

    @staticmethod
    def filter_incomes(incomes: List[Mapping[str, Any]], ship: Any = None,
                       month: Optional[str] = None) -> List[Mapping[str, Any]]:
        """
        Keep incomes matching the ship and month filters.

        Args:
            incomes: Income records
            ship: Ship id; compared as text since query strings carry no types
            month: "YYYY-MM" prefix matched against the record's date

        Empty filters match everything.
        """
        filtered = []
        for income in incomes:
            if ship not in (None, '') and str(income.get('ship')) != str(ship):
                continue
            if month and not str(income.get('date') or '').startswith(month):
                continue
            filtered.append(income)
        return filtered

    @staticmethod
    def ship_name(ships: List[Mapping[str, Any]], ship_id: Any) -> str:
        for ship in ships:
            if str(ship.get('id')) == str(ship_id):
                return ship.get('name') or UNKNOWN_SHIP
        return UNKNOWN_SHIP

    @staticmethod
    def income_totals(incomes: List[Mapping[str, Any]]) -> Dict[str, Decimal]:
        """Summed amount and actual_amount; unparseable values count as zero"""
        totals = {'amount': Decimal(0), 'actual_amount': Decimal(0)}
        for income in incomes:
            for field in totals:
                value = parse_decimal(income.get(field))
                if value is not None:
                    totals[field] += value
        return {field: to_money(value) for field, value in totals.items()}
