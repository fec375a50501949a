"""
Access Scope

Identity-based row restriction for the resources that carry an owner.
"""
from typing import List, Optional, Sequence

from errors import AuthorizationError
from models import CanonicalRecord, Identity, ResourceKind


def require_identity(kind: ResourceKind, identity: Optional[Identity], allow_anonymous_orders: bool = True):
    """
    Reject anonymous callers for resources that need a caller

    Raises:
        AuthorizationError: users searched anonymously, or orders when
            anonymous order search is disabled
    """
    if identity is not None:
        return
    if kind is ResourceKind.USERS:
        raise AuthorizationError()
    if kind is ResourceKind.ORDERS and not allow_anonymous_orders:
        raise AuthorizationError()


def scope(kind: ResourceKind, records: Sequence[CanonicalRecord], identity: Optional[Identity]) -> List[CanonicalRecord]:
    """Limit orders to the caller's own rows; other kinds pass through"""
    if kind is ResourceKind.ORDERS and identity is not None:
        return [order for order in records if order.owner_id == identity.id]
    return list(records)
