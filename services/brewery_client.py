"""
Brewery API Client

Fetches whole resource collections from the upstream brewery service.
No filtering or paging is delegated upstream and nothing is retried.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from errors import UpstreamError
from models import ResourceKind

logger = logging.getLogger(__name__)

RESOURCE_PATHS = {
    ResourceKind.INVENTORY: '/api/inventory',
    ResourceKind.ORDERS: '/api/order',
    ResourceKind.USERS: '/api/user',
    ResourceKind.REVIEWS: '/api/reviews',
}


class BreweryClient:
    """Read-only access to the brewery API collections"""

    def __init__(self, base_url: str, timeout: float = 10):
        """
        Initialize brewery client

        Args:
            base_url: Brewery API root, e.g. http://localhost:5089
            timeout: Seconds to wait for the upstream before giving up
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def url_for(self, kind: ResourceKind) -> str:
        return f'{self.base_url}{RESOURCE_PATHS[kind]}'

    def fetch_collection(self, kind: ResourceKind, token: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch the full collection for a resource kind

        Args:
            kind: Collection to fetch
            token: Caller bearer token to forward, if any

        Returns:
            Raw upstream records in upstream order

        Raises:
            UpstreamError: transport failure, non-2xx status or a non-list body
        """
        headers = {'Accept': 'application/json'}
        if token:
            headers['Authorization'] = f'Bearer {token}'

        default_message = kind.default_error_message
        try:
            response = requests.get(self.url_for(kind), headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise UpstreamError.from_response(e.response, default_message) from e
        except requests.exceptions.Timeout as e:
            raise UpstreamError(None, default_message, 'Upstream request timed out') from e
        except requests.exceptions.RequestException as e:
            raise UpstreamError(None, default_message, str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(None, default_message, 'Upstream returned invalid JSON') from e

        if not isinstance(data, list):
            raise UpstreamError(None, default_message, 'Upstream returned an unexpected payload')

        logger.debug(f'Fetched {len(data)} {kind.value} records')
        return data
