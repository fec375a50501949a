"""
Predicate Filters

One filter per resource kind. A record survives when it passes every
criterion the request supplied; missing criteria never exclude anything.
All comparisons are case-insensitive and leave the stored casing alone.
"""
from typing import Callable, Dict, List, Optional, Sequence

from models import (
    CanonicalRecord,
    InventoryRecord,
    OrderRecord,
    ResourceKind,
    ReviewRecord,
    SearchParams,
    UserRecord,
)


def number_text(value: float) -> str:
    """Decimal rendering used for exact-token matches (4.0 -> '4', 4.5 -> '4.5')"""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _contains(needle: str, *haystacks: Optional[str]) -> bool:
    needle = needle.lower()
    return any(h is not None and needle in h.lower() for h in haystacks)


def _equals_any(value: str, *candidates: Optional[str]) -> bool:
    value = value.lower()
    return any(c is not None and c.lower() == value for c in candidates)


def match_inventory(item: InventoryRecord, params: SearchParams) -> bool:
    if params.query and not _contains(params.query, item.name, item.description):
        return False
    if params.type and not _equals_any(params.type, item.type):
        return False
    if params.flavor:
        profile = item.taste_profile
        if not _equals_any(params.flavor, profile.primary_flavor, profile.sweetness, profile.bitterness):
            return False
    return True


def match_order(order: OrderRecord, params: SearchParams) -> bool:
    # Ids are matched as whole tokens, never as substrings
    if params.query and not _equals_any(params.query, str(order.id), str(order.owner_id)):
        return False
    if params.status and not _equals_any(params.status, order.status):
        return False
    return True


def match_user(user: UserRecord, params: SearchParams) -> bool:
    if params.query and not _contains(params.query, user.name, user.email):
        return False
    return True


def match_review(review: ReviewRecord, params: SearchParams) -> bool:
    if params.query:
        if not (_contains(params.query, review.message) or params.query == number_text(review.rating)):
            return False
    return True


FILTERS: Dict[ResourceKind, Callable[[CanonicalRecord, SearchParams], bool]] = {
    ResourceKind.INVENTORY: match_inventory,
    ResourceKind.ORDERS: match_order,
    ResourceKind.USERS: match_user,
    ResourceKind.REVIEWS: match_review,
}


def apply_filters(kind: ResourceKind, records: Sequence[CanonicalRecord], params: SearchParams) -> List[CanonicalRecord]:
    """Keep the records matching `params`, preserving their order"""
    matches = FILTERS[kind]
    return [record for record in records if matches(record, params)]
