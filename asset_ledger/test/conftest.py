"""
Pytest configuration and fixtures
The backend is replaced by FakeApiClient; no test touches the network.
"""
import os

import pytest
import requests

os.environ.setdefault('LOG_DIR', os.path.join(os.path.dirname(__file__), '..', '..', 'logs'))
os.environ.setdefault('LOG_LEVEL', 'WARNING')

from asset_ledger import create_app
from asset_ledger.api.client import ApiResponse


class FakeApiClient:
    """
    In-memory stand-in for ApiClient.

    routes maps (method, path) to a response body, a list of bodies served in
    order, or an exception instance to raise. Every call is recorded.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def _respond(self, method, path, params=None, json=None, absolute=False):
        self.calls.append({'method': method, 'path': path, 'params': params,
                           'json': json, 'absolute': absolute})
        key = (method, path)
        if key not in self.routes:
            response = requests.Response()
            response.status_code = 404
            raise requests.HTTPError(f"404 for {method} {path}", response=response)

        body = self.routes[key]
        if isinstance(body, _Sequence):
            body = body.next()
        if isinstance(body, Exception):
            raise body
        return ApiResponse(status_code=200, data=body, url=path)

    def get(self, path, params=None, absolute=False):
        return self._respond('GET', path, params=params, absolute=absolute)

    def post(self, path, json=None, params=None):
        return self._respond('POST', path, params=params, json=json)

    def put(self, path, json=None, params=None):
        return self._respond('PUT', path, params=params, json=json)

    def delete(self, path, params=None):
        return self._respond('DELETE', path, params=params)

    def calls_for(self, method):
        return [call for call in self.calls if call['method'] == method]


class _Sequence:
    """Serve successive bodies for repeated calls to the same route"""

    def __init__(self, *bodies):
        self.bodies = list(bodies)

    def next(self):
        return self.bodies.pop(0)


def sequence(*bodies):
    return _Sequence(*bodies)


TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret-key',
    'API_BASE_URL': 'http://backend.test/api/',
    'WTF_CSRF_ENABLED': False,
    'RATELIMIT_ENABLED': False,
    'ENABLE_HTTPS': False,
    'FORCE_HTTPS_REDIRECT': False,
    'SESSION_COOKIE_SECURE': False,
}


@pytest.fixture(scope='function')
def fake_api():
    """Backend stand-in; tests fill in fake_api.routes"""
    return FakeApiClient()


@pytest.fixture(scope='function')
def app(fake_api):
    """Create Flask application wired to the fake backend"""
    app = create_app(api_client=fake_api, config=TEST_CONFIG)

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()
