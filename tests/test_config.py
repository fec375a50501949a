import pytest

import config as config_mod
from config import Settings

ENV_VARS = [
    'ENVIRONMENT', 'NODE_ENV', 'BREWERY_API_URL', 'PORT', 'JWT_SECRET', 'UPSTREAM_TIMEOUT',
    'FORWARD_AUTH_TOKEN', 'ALLOW_ANONYMOUS_ORDERS', 'RESPONSE_FIELD_CASE',
    'RATE_LIMIT', 'RATE_LIMIT_ENABLED', 'LOG_LEVEL', 'LOG_DIR', 'LOG_TO_FILE',
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_mod, 'load_dotenv', lambda *args, **kwargs: False)


def test_fallback_values():
    settings = Settings.from_env()

    assert settings.environment == 'development'
    assert settings.brewery_api_url == 'http://localhost:5089'
    assert settings.port == 3007
    assert settings.jwt_secret == ''
    assert settings.forward_auth_token is True
    assert settings.allow_anonymous_orders is True
    assert settings.response_field_case == 'pascal'


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv('ENVIRONMENT', 'production')
    monkeypatch.setenv('BREWERY_API_URL', 'https://api.brewery.com')
    monkeypatch.setenv('PORT', '5000')
    monkeypatch.setenv('JWT_SECRET', 'custom-secret')
    monkeypatch.setenv('ALLOW_ANONYMOUS_ORDERS', 'false')
    monkeypatch.setenv('RESPONSE_FIELD_CASE', 'Camel')
    monkeypatch.setenv('UPSTREAM_TIMEOUT', '2.5')

    settings = Settings.from_env()

    assert settings.environment == 'production'
    assert settings.brewery_api_url == 'https://api.brewery.com'
    assert settings.port == 5000
    assert settings.jwt_secret == 'custom-secret'
    assert settings.allow_anonymous_orders is False
    assert settings.response_field_case == 'camel'
    assert settings.upstream_timeout == 2.5


def test_environment_file_is_loaded_first(monkeypatch):
    loaded = []
    monkeypatch.setattr(config_mod, 'load_dotenv', lambda *args, **kwargs: loaded.append(args))
    monkeypatch.setenv('ENVIRONMENT', 'staging')

    Settings.from_env()

    assert loaded == [('.env.staging',), ()]


def test_node_env_names_the_environment(monkeypatch):
    loaded = []
    monkeypatch.setattr(config_mod, 'load_dotenv', lambda *args, **kwargs: loaded.append(args))
    monkeypatch.setenv('NODE_ENV', 'production')

    settings = Settings.from_env()

    assert settings.environment == 'production'
    assert loaded == [('.env.production',), ()]


def test_environment_wins_over_node_env(monkeypatch):
    monkeypatch.setenv('NODE_ENV', 'production')
    monkeypatch.setenv('ENVIRONMENT', 'staging')
    assert Settings.from_env().environment == 'staging'


def test_local_env_file_when_unnamed(monkeypatch):
    loaded = []
    monkeypatch.setattr(config_mod, 'load_dotenv', lambda *args, **kwargs: loaded.append(args))

    settings = Settings.from_env()

    assert settings.environment == 'development'
    assert loaded == [('.env.local',), ()]


def test_blank_flags_use_defaults(monkeypatch):
    monkeypatch.setenv('FORWARD_AUTH_TOKEN', '  ')
    assert Settings.from_env().forward_auth_token is True


def test_unknown_field_case_is_rejected(monkeypatch):
    monkeypatch.setenv('RESPONSE_FIELD_CASE', 'kebab')
    with pytest.raises(ValueError):
        Settings.from_env()
