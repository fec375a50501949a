"""
Search Service

Runs one search request end to end:
fetch -> normalize -> scope -> filter -> paginate -> envelope.
Stateless; every call works on its own copy of the upstream collection.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from errors import UpstreamError
from models import CanonicalRecord, Identity, ResourceKind, SearchParams
from services.filters import apply_filters
from services.normalizer import normalize_collection
from services.scope import require_identity, scope
from utils import paginate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """One page of results plus the filtered (unpaginated) count"""
    results: List[CanonicalRecord]
    total: int

    def to_dict(self, field_case: str = 'pascal') -> Dict[str, Any]:
        return {
            'results': [record.to_public(field_case) for record in self.results],
            'total': self.total,
        }


class SearchService:
    """Searches brewery API collections on behalf of a caller"""

    def __init__(self, client, allow_anonymous_orders: bool = True, forward_auth_token: bool = True):
        """
        Initialize search service

        Args:
            client: Object with fetch_collection(kind, token=None), e.g. BreweryClient
            allow_anonymous_orders: Serve order searches to callers without identity
            forward_auth_token: Pass the caller's bearer token to the upstream fetch
        """
        self.client = client
        self.allow_anonymous_orders = allow_anonymous_orders
        self.forward_auth_token = forward_auth_token

    def search(self, kind: ResourceKind, params: SearchParams,
               identity: Optional[Identity] = None, token: Optional[str] = None) -> SearchResult:
        """
        Search one resource collection

        Args:
            kind: Collection to search
            params: Validated search parameters
            identity: Verified caller, None when anonymous
            token: Caller bearer token, forwarded upstream when enabled

        Returns:
            SearchResult with the requested page and the filtered total

        Raises:
            AuthorizationError: caller identity required but absent (no fetch made)
            UpstreamError: the collection could not be fetched
        """
        require_identity(kind, identity, self.allow_anonymous_orders)

        raws = self._fetch(kind, token if self.forward_auth_token else None)
        records = normalize_collection(kind, raws)
        if len(records) < len(raws):
            logger.warning(f'Dropped {len(raws) - len(records)} malformed {kind.value} record(s)')

        # Scope first so partial matches never reach another owner's rows
        records = scope(kind, records, identity)
        records = apply_filters(kind, records, params)
        page = paginate(records, params.page, params.limit)

        logger.debug(
            f'{kind.value} search: {len(raws)} fetched, {len(records)} matched, '
            f'{len(page)} on page {params.page}'
        )
        return SearchResult(results=page, total=len(records))

    def _fetch(self, kind: ResourceKind, token: Optional[str]) -> List[Any]:
        try:
            return self.client.fetch_collection(kind, token=token)
        except UpstreamError as e:
            logger.error(f'{kind.default_error_message}: {e.detail if e.detail is not None else e.message}')
            raise

    def search_inventory(self, params: SearchParams, identity: Optional[Identity] = None,
                         token: Optional[str] = None) -> SearchResult:
        return self.search(ResourceKind.INVENTORY, params, identity, token)

    def search_orders(self, params: SearchParams, identity: Optional[Identity] = None,
                      token: Optional[str] = None) -> SearchResult:
        return self.search(ResourceKind.ORDERS, params, identity, token)

    def search_users(self, params: SearchParams, identity: Optional[Identity] = None,
                     token: Optional[str] = None) -> SearchResult:
        return self.search(ResourceKind.USERS, params, identity, token)

    def search_reviews(self, params: SearchParams, identity: Optional[Identity] = None,
                       token: Optional[str] = None) -> SearchResult:
        return self.search(ResourceKind.REVIEWS, params, identity, token)
