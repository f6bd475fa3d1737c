"""
Asset routes
List, create, edit and delete assets held by the backend
"""

import requests
from flask import Blueprint, render_template, redirect, url_for, flash, request

from asset_ledger.api.exceptions import ApiLedgerError, ValidationError
from asset_ledger.logger import get_logger
from asset_ledger.services.asset_service import AssetService
from asset_ledger.utils.logging_sanitizer import sanitize_form_data
from .dependencies import asset_service

logger = get_logger("asset_ledger.routes.assets")
bp = Blueprint('assets', __name__)


def _submitted_values():
    """Form values as submitted, for re-rendering after a failed save"""
    values = request.form.to_dict()
    values['is_active'] = 'is_active' in request.form
    values['total_amount'] = AssetService.compute_total(values.get('quantity'), values.get('rate')) or ''
    return values


@bp.route('/')
def list():
    """List all assets with the total asset value"""
    service = asset_service()
    try:
        assets = service.list_assets()
    except (requests.RequestException, ApiLedgerError) as e:
        logger.error(f"Failed to load assets: {e}")
        flash('Failed to load assets', 'error')
        assets = []

    return render_template('assets/list.html',
                           assets=assets,
                           total_asset_value=AssetService.total_asset_value(assets))


@bp.route('/create', methods=['GET', 'POST'])
def create():
    """Create a new asset"""
    if request.method == 'POST':
        logger.debug(f"Asset create submitted: {sanitize_form_data(request.form)}")
        try:
            payload = AssetService.build_payload(request.form)
            asset_service().create_asset(payload)
            flash('Asset created!', 'success')
            return redirect(url_for('assets.list'))
        except ValidationError as e:
            flash(str(e), 'error')
            logger.warning(f"Asset creation rejected: {e}")
        except requests.RequestException as e:
            flash('Error saving asset', 'error')
            logger.error(f"Backend error creating asset: {e}")

        return render_template('assets/form.html', form=_submitted_values(), asset_id=None)

    return render_template('assets/form.html', form=AssetService.form_values(), asset_id=None)


@bp.route('/<int:asset_id>/edit', methods=['GET', 'POST'])
def edit(asset_id):
    """Edit an existing asset"""
    service = asset_service()

    if request.method == 'POST':
        logger.debug(f"Asset {asset_id} edit submitted: {sanitize_form_data(request.form)}")
        try:
            payload = AssetService.build_payload(request.form)
            service.update_asset(asset_id, payload)
            flash('Asset updated!', 'success')
            return redirect(url_for('assets.list'))
        except ValidationError as e:
            flash(str(e), 'error')
            logger.warning(f"Asset {asset_id} update rejected: {e}")
        except requests.RequestException as e:
            flash('Error saving asset', 'error')
            logger.error(f"Backend error updating asset {asset_id}: {e}")

        return render_template('assets/form.html', form=_submitted_values(), asset_id=asset_id)

    asset = service.get_asset(asset_id)
    return render_template('assets/form.html', form=AssetService.form_values(asset), asset_id=asset_id)


@bp.route('/<int:asset_id>/delete', methods=['POST'])
def delete(asset_id):
    """Delete an asset"""
    try:
        asset_service().delete_asset(asset_id)
        flash('Asset deleted!', 'success')
    except requests.RequestException as e:
        flash(f'Delete failed: {e}', 'error')
        logger.error(f"Backend error deleting asset {asset_id}: {e}")

    return redirect(url_for('assets.list'))
