"""
Configuration for the Brewery Search Gateway

Settings come from environment variables, optionally loaded from
`.env.<ENVIRONMENT>` (NODE_ENV is accepted in its place, `local` when neither
is set) and then `.env`. Existing variables always win.
"""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

FIELD_CASES = ('pascal', 'camel')


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _environment_name(default: str) -> str:
    # ENVIRONMENT takes precedence over NODE_ENV
    return os.getenv('ENVIRONMENT') or os.getenv('NODE_ENV') or default


def load_env_files():
    """Load the environment-specific dotenv file, then the generic one"""
    environment = _environment_name('local')
    load_dotenv(f'.env.{environment}')
    load_dotenv()


@dataclass(frozen=True)
class Settings:
    environment: str = 'development'
    port: int = 3007
    brewery_api_url: str = 'http://localhost:5089'
    jwt_secret: str = ''
    upstream_timeout: float = 10.0
    forward_auth_token: bool = True
    allow_anonymous_orders: bool = True
    response_field_case: str = 'pascal'
    rate_limit: str = '100 per hour'
    rate_limit_enabled: bool = True
    log_level: str = 'INFO'
    log_dir: str = 'logs'
    log_to_file: bool = True

    @classmethod
    def from_env(cls) -> 'Settings':
        """
        Build settings from the process environment

        Returns:
            Settings with fallbacks applied for anything unset

        Raises:
            ValueError: PORT/UPSTREAM_TIMEOUT are not numbers or the field case is unknown
        """
        load_env_files()

        field_case = os.getenv('RESPONSE_FIELD_CASE', 'pascal').strip().lower()
        if field_case not in FIELD_CASES:
            raise ValueError(f'RESPONSE_FIELD_CASE must be one of {FIELD_CASES}, got {field_case!r}')

        return cls(
            environment=_environment_name('development'),
            port=int(os.getenv('PORT', '3007')),
            brewery_api_url=os.getenv('BREWERY_API_URL', 'http://localhost:5089'),
            jwt_secret=os.getenv('JWT_SECRET', ''),
            upstream_timeout=float(os.getenv('UPSTREAM_TIMEOUT', '10')),
            forward_auth_token=_env_flag('FORWARD_AUTH_TOKEN', True),
            allow_anonymous_orders=_env_flag('ALLOW_ANONYMOUS_ORDERS', True),
            response_field_case=field_case,
            rate_limit=os.getenv('RATE_LIMIT', '100 per hour'),
            rate_limit_enabled=_env_flag('RATE_LIMIT_ENABLED', True),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            log_dir=os.getenv('LOG_DIR', 'logs'),
            log_to_file=_env_flag('LOG_TO_FILE', True),
        )
