"""
Daily income routes
List (with ship and month filters), create, edit and delete income records
"""

import requests
from flask import Blueprint, render_template, redirect, url_for, flash, request

from asset_ledger.api.exceptions import ApiLedgerError, ValidationError
from asset_ledger.logger import get_logger
from asset_ledger.services.income_service import IncomeService
from asset_ledger.utils.logging_sanitizer import sanitize_form_data
from .dependencies import income_service

logger = get_logger("asset_ledger.routes.incomes")
bp = Blueprint('incomes', __name__)


def _load_lookup(loader, label):
    """Ships and projects degrade to an empty list when the backend fails"""
    try:
        return loader()
    except (requests.RequestException, ApiLedgerError) as e:
        logger.error(f"Error fetching {label}: {e}")
        return []


def _render_form(service, form, income_id):
    return render_template('incomes/form.html',
                           form=form,
                           income_id=income_id,
                           ships=_load_lookup(service.list_ships, 'ships'),
                           projects=_load_lookup(service.list_projects, 'projects'))


def _submitted_values():
    values = request.form.to_dict()
    values['is_active'] = 'is_active' in request.form
    computed = IncomeService.compute_amount(values.get('sand_rate'), values.get('sands_amount'))
    if computed is not None:
        values['amount'] = computed
    return values


@bp.route('/')
def list():
    """List incomes, filtered by ship and month"""
    service = income_service()
    filter_ship = request.args.get('ship', '')
    filter_month = request.args.get('month', '')

    ships = _load_lookup(service.list_ships, 'ships')
    try:
        incomes = service.list_incomes()
    except (requests.RequestException, ApiLedgerError) as e:
        logger.error(f"Error fetching incomes: {e}")
        flash('Failed to load incomes', 'error')
        incomes = []

    filtered = IncomeService.filter_incomes(incomes, ship=filter_ship, month=filter_month)
    logger.debug(f"Income list: {len(filtered)} of {len(incomes)} shown (ship={filter_ship!r}, month={filter_month!r})")

    rows = [dict(income, ship_name=IncomeService.ship_name(ships, income.get('ship'))) for income in filtered]

    return render_template('incomes/list.html',
                           incomes=rows,
                           total_count=len(incomes),
                           totals=IncomeService.income_totals(filtered),
                           ships=ships,
                           filter_ship=filter_ship,
                           filter_month=filter_month)


@bp.route('/create', methods=['GET', 'POST'])
def create():
    """Create a daily income record"""
    service = income_service()

    if request.method == 'POST':
        logger.debug(f"Income create submitted: {sanitize_form_data(request.form)}")
        try:
            payload = IncomeService.build_payload(request.form)
            service.create_income(payload)
            flash('Income created!', 'success')
            return redirect(url_for('incomes.list'))
        except ValidationError as e:
            flash(str(e), 'error')
            logger.warning(f"Income creation rejected: {e}")
        except requests.RequestException as e:
            flash(f'Error: {e}', 'error')
            logger.error(f"Backend error creating income: {e}")

        return _render_form(service, _submitted_values(), None)

    return _render_form(service, IncomeService.form_values(), None)


@bp.route('/<int:income_id>/edit', methods=['GET', 'POST'])
def edit(income_id):
    """Edit a daily income record"""
    service = income_service()

    if request.method == 'POST':
        logger.debug(f"Income {income_id} edit submitted: {sanitize_form_data(request.form)}")
        try:
            payload = IncomeService.build_payload(request.form)
            service.update_income(income_id, payload)
            flash('Income updated!', 'success')
            return redirect(url_for('incomes.list'))
        except ValidationError as e:
            flash(str(e), 'error')
            logger.warning(f"Income {income_id} update rejected: {e}")
        except requests.RequestException as e:
            flash(f'Error: {e}', 'error')
            logger.error(f"Backend error updating income {income_id}: {e}")

        return _render_form(service, _submitted_values(), income_id)

    income = service.get_income(income_id)
    return _render_form(service, IncomeService.form_values(income), income_id)


@bp.route('/<int:income_id>/delete', methods=['POST'])
def delete(income_id):
    """Delete a daily income record"""
    try:
        income_service().delete_income(income_id)
        flash('Income deleted!', 'success')
    except requests.RequestException as e:
        flash(f'Delete failed: {e}', 'error')
        logger.error(f"Backend error deleting income {income_id}: {e}")

    return redirect(url_for('incomes.list', ship=request.args.get('ship', ''), month=request.args.get('month', '')))
