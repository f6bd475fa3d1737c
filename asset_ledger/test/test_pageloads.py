"""
Page load tests for the admin screens
Every route is rendered against the in-memory backend from conftest.
"""
import pytest
import requests

from asset_ledger import create_app
from conftest import TEST_CONFIG, FakeApiClient

ASSETS_PAGE_1 = {
    'results': [
        {'id': 1, 'item': 'Generator', 'description': '', 'quantity': 1, 'rate': 10, 'total_amount': 10.00, 'is_active': True},
        {'id': 2, 'item': 'Winch', 'description': 'Deck', 'quantity': 2, 'rate': 12.75, 'total_amount': 25.50, 'is_active': True},
    ],
    'next': 'http://backend.test/api/assets/?page=2',
}
ASSETS_PAGE_2 = {
    'results': [
        {'id': 3, 'item': 'Pump', 'description': None, 'quantity': 1, 'rate': '14.25', 'total_amount': '14.25', 'is_active': False},
    ],
    'next': None,
}
SHIPS = [{'id': 1, 'name': 'MV Padma'}, {'id': 2, 'name': 'MV Meghna'}]
PROJECTS = {'results': [{'id': 7, 'name': 'Dredging'}], 'next': None}
INCOMES = [
    {'id': 10, 'ship': 1, 'project': 7, 'date': '2026-09-30', 'sand_rate': '12.00', 'sands_amount': '100',
     'amount': '1200.00', 'actual_amount': '1150.00', 'description': '', 'is_active': True},
    {'id': 11, 'ship': 2, 'project': None, 'date': '2026-10-02', 'sand_rate': None, 'sands_amount': None,
     'amount': '300.00', 'actual_amount': '300.00', 'description': 'night shift', 'is_active': False},
]


@pytest.fixture
def backend(fake_api):
    fake_api.routes.update({
        ('GET', 'assets/'): ASSETS_PAGE_1,
        ('GET', 'http://backend.test/api/assets/?page=2'): ASSETS_PAGE_2,
        ('GET', 'assets/2/'): ASSETS_PAGE_1['results'][1],
        ('POST', 'assets/'): {'id': 4},
        ('PUT', 'assets/2/'): {'id': 2},
        ('DELETE', 'assets/2/'): None,
        ('GET', 'ships/'): SHIPS,
        ('GET', 'projects/'): PROJECTS,
        ('GET', 'incomes/'): INCOMES,
        ('GET', 'incomes/10/'): INCOMES[0],
        ('POST', 'incomes/'): {'id': 12},
        ('PUT', 'incomes/10/'): {'id': 10},
        ('DELETE', 'incomes/10/'): None,
    })
    return fake_api


# ── application setup ────────────────────────────────────────────────────────

def test_secret_key_required(monkeypatch):
    monkeypatch.delenv('SECRET_KEY', raising=False)
    config = dict(TEST_CONFIG, SECRET_KEY=None)
    with pytest.raises(RuntimeError, match="SECRET_KEY"):
        create_app(api_client=FakeApiClient(), config=config)


def test_api_base_url_required_without_injected_client(monkeypatch):
    monkeypatch.delenv('API_BASE_URL', raising=False)
    config = dict(TEST_CONFIG, API_BASE_URL=None)
    with pytest.raises(RuntimeError, match="API_BASE_URL"):
        create_app(config=config)


@pytest.mark.parametrize('value', ['0', '-3'])
def test_page_budget_below_one_rejected_at_startup(monkeypatch, value):
    monkeypatch.setenv('PAGINATION_MAX_PAGES', value)
    with pytest.raises(RuntimeError, match="PAGINATION_MAX_PAGES"):
        create_app(api_client=FakeApiClient(), config=TEST_CONFIG)


def test_page_budget_from_environment(monkeypatch):
    monkeypatch.setenv('PAGINATION_MAX_PAGES', '3')
    app = create_app(api_client=FakeApiClient(), config=TEST_CONFIG)
    assert app.config['PAGINATION_MAX_PAGES'] == 3


def test_page_budget_unset_is_unbounded(monkeypatch):
    monkeypatch.setenv('PAGINATION_MAX_PAGES', '')
    app = create_app(api_client=FakeApiClient(), config=TEST_CONFIG)
    assert app.config['PAGINATION_MAX_PAGES'] is None


def test_client_built_from_config():
    app = create_app(config=dict(TEST_CONFIG, API_TIMEOUT_MS=1500))
    api = app.extensions['api_client']
    assert api.base_url == 'http://backend.test/api/'
    assert api.timeout == 1.5
    api.close()


def test_index_and_security_headers(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'Daily Income' in response.data
    assert response.headers['X-Frame-Options'] == 'SAMEORIGIN'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok', 'api_base_url': 'http://backend.test/api/'}


# ── assets ───────────────────────────────────────────────────────────────────

def test_asset_list_shows_all_pages_and_total(client, backend):
    response = client.get('/assets/')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'Generator' in html and 'Winch' in html and 'Pump' in html
    assert 'Tk 49.75' in html


def test_asset_list_degrades_when_backend_down(client, fake_api):
    fake_api.routes[('GET', 'assets/')] = requests.ConnectionError("refused")

    response = client.get('/assets/')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'Failed to load assets' in html
    assert 'No assets found' in html
    assert 'Tk 0.00' in html


def test_asset_list_page_budget(app, client, backend):
    app.config['PAGINATION_MAX_PAGES'] = 1

    html = client.get('/assets/').get_data(as_text=True)

    assert 'Failed to load assets' in html


def test_asset_create_form(client):
    response = client.get('/assets/create')
    assert response.status_code == 200
    assert 'Add Asset' in response.get_data(as_text=True)


def test_asset_create_posts_payload(client, backend):
    response = client.post('/assets/create', data={
        'item': 'Anchor', 'description': 'spare', 'quantity': '2', 'rate': '150.25', 'is_active': 'on',
    })

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/assets/')
    posted = backend.calls_for('POST')[0]
    assert posted['path'] == 'assets/'
    assert posted['json']['total_amount'] == 300.5
    assert posted['json']['is_active'] is True


def test_asset_create_invalid_rerenders_form(client, backend):
    response = client.post('/assets/create', data={'item': 'Anchor', 'quantity': 'two', 'rate': '1'})
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'Quantity must be a number.' in html
    assert 'Anchor' in html
    assert backend.calls_for('POST') == []


def test_asset_create_backend_error(client, fake_api):
    fake_api.routes[('POST', 'assets/')] = requests.Timeout("timed out")

    response = client.post('/assets/create', data={'item': 'Anchor', 'quantity': '1', 'rate': '1'})

    assert response.status_code == 200
    assert 'Error saving asset' in response.get_data(as_text=True)


def test_asset_edit_prefills_and_puts(client, backend):
    response = client.get('/assets/2/edit')
    html = response.get_data(as_text=True)
    assert response.status_code == 200
    assert 'Edit Asset' in html
    assert 'Winch' in html

    response = client.post('/assets/2/edit', data={'item': 'Winch', 'quantity': '3', 'rate': '12.75'})
    assert response.status_code == 302
    put = backend.calls_for('PUT')[0]
    assert put['path'] == 'assets/2/'
    assert put['json']['total_amount'] == 38.25
    assert put['json']['is_active'] is False


def test_asset_edit_record_zero_posts_to_edit(client, fake_api):
    fake_api.routes[('GET', 'assets/0/')] = {'id': 0, 'item': 'Buoy', 'quantity': 1, 'rate': 2, 'is_active': True}

    html = client.get('/assets/0/edit').get_data(as_text=True)

    assert 'Edit Asset' in html
    assert 'action="/assets/0/edit"' in html


def test_asset_form_live_total_script(client):
    html = client.get('/assets/create').get_data(as_text=True)
    assert 'id="total_amount"' in html
    assert "addEventListener('input'" in html


def test_asset_edit_missing_record(client, fake_api):
    response = client.get('/assets/99/edit')
    assert response.status_code == 502
    assert 'Backend unavailable' in response.get_data(as_text=True)


def test_asset_delete(client, backend):
    response = client.post('/assets/2/delete', follow_redirects=True)

    assert response.status_code == 200
    assert 'Asset deleted!' in response.get_data(as_text=True)
    assert backend.calls_for('DELETE')[0]['path'] == 'assets/2/'


# ── incomes ──────────────────────────────────────────────────────────────────

def test_income_list(client, backend):
    html = client.get('/incomes/').get_data(as_text=True)

    assert 'MV Padma' in html and 'MV Meghna' in html
    assert 'Tk 1200.00' in html
    assert 'Inactive' in html


def test_income_list_filters(client, backend):
    html = client.get('/incomes/?ship=2&month=2026-10').get_data(as_text=True)

    assert '2026-10-02' in html
    assert '2026-09-30' not in html
    assert 'Tk 300.00' in html


def test_income_list_filters_without_match(client, backend):
    html = client.get('/incomes/?month=2025-01').get_data(as_text=True)
    assert 'No incomes found for selected filters.' in html


def test_income_list_empty(client, fake_api):
    fake_api.routes.update({('GET', 'incomes/'): [], ('GET', 'ships/'): []})
    html = client.get('/incomes/').get_data(as_text=True)
    assert 'No incomes found.' in html


def test_income_list_survives_lookup_failure(client, backend):
    backend.routes[('GET', 'ships/')] = requests.ConnectionError("refused")

    html = client.get('/incomes/').get_data(as_text=True)

    assert 'N/A' in html
    assert '2026-09-30' in html


def test_income_create_form_lists_lookups(client, backend):
    html = client.get('/incomes/create').get_data(as_text=True)
    assert 'Add Daily Income' in html
    assert 'MV Meghna' in html
    assert 'Dredging' in html


def test_income_create(client, backend):
    response = client.post('/incomes/create', data={
        'ship': '1', 'project': '', 'date': '2026-10-19',
        'sand_rate': '10', 'sands_amount': '55.5', 'amount': '', 'actual_amount': '500',
        'is_active': 'on',
    })

    assert response.status_code == 302
    posted = backend.calls_for('POST')[0]['json']
    assert posted['amount'] == 555.0
    assert posted['actual_amount'] == 500.0
    assert posted['project'] is None


def test_income_create_rejects_non_positive_amount(client, backend):
    response = client.post('/incomes/create', data={
        'ship': '1', 'date': '2026-10-19', 'amount': '0',
    })

    assert response.status_code == 200
    assert 'Amount must be a positive number.' in response.get_data(as_text=True)
    assert backend.calls_for('POST') == []


def test_income_edit(client, backend):
    html = client.get('/incomes/10/edit').get_data(as_text=True)
    assert 'Edit Daily Income' in html

    response = client.post('/incomes/10/edit', data={
        'ship': '1', 'project': '7', 'date': '2026-09-30', 'amount': '1,250',
    })
    assert response.status_code == 302
    put = backend.calls_for('PUT')[0]
    assert put['path'] == 'incomes/10/'
    assert put['json']['amount'] == 1250.0


def test_income_edit_record_zero_posts_to_edit(client, backend):
    backend.routes[('GET', 'incomes/0/')] = dict(INCOMES[0], id=0)

    html = client.get('/incomes/0/edit').get_data(as_text=True)

    assert 'Edit Daily Income' in html
    assert 'action="/incomes/0/edit"' in html


def test_income_form_live_amount_script(client, backend):
    html = client.get('/incomes/create').get_data(as_text=True)
    assert "getElementById('sands_amount')" in html
    assert "addEventListener('input'" in html


def test_income_delete_keeps_filters(client, backend):
    response = client.post('/incomes/10/delete?ship=1&month=2026-09')

    assert response.status_code == 302
    assert 'ship=1' in response.headers['Location']
    assert 'month=2026-09' in response.headers['Location']
    assert backend.calls_for('DELETE')[0]['path'] == 'incomes/10/'
