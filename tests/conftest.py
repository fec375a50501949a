import jwt
import pytest

from app import create_app
from config import Settings

JWT_SECRET = 'test-secret-that-is-long-enough-for-hs256'


class FakeBreweryClient:
    """Stands in for BreweryClient; records every fetch"""

    def __init__(self):
        self.collections = {}
        self.calls = []
        self.error = None

    def fetch_collection(self, kind, token=None):
        self.calls.append((kind, token))
        if self.error is not None:
            raise self.error
        return list(self.collections.get(kind, []))


@pytest.fixture
def brewery():
    return FakeBreweryClient()


@pytest.fixture
def settings():
    return Settings(jwt_secret=JWT_SECRET, rate_limit_enabled=False, log_to_file=False)


@pytest.fixture
def app(settings, brewery):
    return create_app(settings, brewery_client=brewery)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    def _headers(user_id=1, email='test@example.com'):
        token = jwt.encode({'id': user_id, 'email': email}, JWT_SECRET, algorithm='HS256')
        return {'Authorization': f'Bearer {token}'}
    return _headers
