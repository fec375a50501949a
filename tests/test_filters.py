import pytest

from errors import AuthorizationError
from models import (
    Identity,
    InventoryRecord,
    OrderRecord,
    ResourceKind,
    ReviewRecord,
    SearchParams,
    UserRecord,
)
from services.filters import apply_filters, number_text
from services.scope import require_identity, scope
from tests.sample_data import INVENTORY, ORDERS, REVIEWS, USERS


@pytest.fixture
def inventory():
    return [InventoryRecord.model_validate(raw) for raw in INVENTORY]


@pytest.fixture
def orders():
    return [OrderRecord.model_validate(raw) for raw in ORDERS]


def ids(records):
    return [record.id for record in records]


def test_no_criteria_keeps_everything(inventory):
    assert ids(apply_filters(ResourceKind.INVENTORY, inventory, SearchParams())) == [1, 2]


@pytest.mark.parametrize('query, expected', [
    ('beer', [1]),
    ('HOPPY', [1]),
    ('sweet', [2]),
    ('taste', [2]),
    ('lager', []),
])
def test_inventory_query_matches_name_or_description(inventory, query, expected):
    assert ids(apply_filters(ResourceKind.INVENTORY, inventory, SearchParams(query=query))) == expected


def test_inventory_type_is_case_insensitive(inventory):
    upper = apply_filters(ResourceKind.INVENTORY, inventory, SearchParams(type='Beer'))
    lower = apply_filters(ResourceKind.INVENTORY, inventory, SearchParams(type='beer'))
    assert upper == lower
    assert ids(upper) == [1, 2]


def test_inventory_type_is_exact_not_substring(inventory):
    assert apply_filters(ResourceKind.INVENTORY, inventory, SearchParams(type='Bee')) == []


@pytest.mark.parametrize('flavor, expected', [
    ('hoppy', [1]),
    ('HIGH', [2]),
    ('Medium', []),
])
def test_inventory_flavor_matches_any_profile_field(inventory, flavor, expected):
    assert ids(apply_filters(ResourceKind.INVENTORY, inventory, SearchParams(flavor=flavor))) == expected


def test_inventory_criteria_are_combined(inventory):
    params = SearchParams(query='beer', type='Beer', flavor='Hoppy')
    assert ids(apply_filters(ResourceKind.INVENTORY, inventory, params)) == [1]
    params = SearchParams(query='beer', flavor='High')
    assert apply_filters(ResourceKind.INVENTORY, inventory, params) == []


def test_order_query_is_an_exact_token(orders):
    assert ids(apply_filters(ResourceKind.ORDERS, orders, SearchParams(query='2'))) == [2]
    more = orders + [OrderRecord(id=12, owner_id=3, total_price=1, status='Pending')]
    assert ids(apply_filters(ResourceKind.ORDERS, more, SearchParams(query='1'))) == [1]


def test_order_status_is_case_insensitive(orders):
    assert ids(apply_filters(ResourceKind.ORDERS, orders, SearchParams(status='shipped'))) == [2]


def test_user_query_matches_name_or_email():
    users = [UserRecord.model_validate(raw) for raw in USERS]
    assert ids(apply_filters(ResourceKind.USERS, users, SearchParams(query='JOEL'))) == [1]
    assert ids(apply_filters(ResourceKind.USERS, users, SearchParams(query='example.com'))) == [1, 2]


def test_review_query_matches_message_or_exact_rating():
    reviews = [ReviewRecord.model_validate(raw) for raw in REVIEWS]
    assert ids(apply_filters(ResourceKind.REVIEWS, reviews, SearchParams(query='great'))) == [1]
    assert ids(apply_filters(ResourceKind.REVIEWS, reviews, SearchParams(query='4'))) == [1]
    assert ids(apply_filters(ResourceKind.REVIEWS, reviews, SearchParams(query='2.5'))) == [2]
    assert apply_filters(ResourceKind.REVIEWS, reviews, SearchParams(query='4.0')) == []


@pytest.mark.parametrize('value, text', [(4.0, '4'), (4.5, '4.5'), (0.1, '0.1'), (10, '10')])
def test_number_text(value, text):
    assert number_text(value) == text


def test_scope_limits_orders_to_the_caller(orders):
    assert ids(scope(ResourceKind.ORDERS, orders, Identity(id=2))) == [2]
    assert ids(scope(ResourceKind.ORDERS, orders, None)) == [1, 2]


def test_scope_ignores_unowned_kinds(inventory):
    assert ids(scope(ResourceKind.INVENTORY, inventory, Identity(id=99))) == [1, 2]


def test_require_identity():
    require_identity(ResourceKind.INVENTORY, None)
    require_identity(ResourceKind.ORDERS, None)
    require_identity(ResourceKind.USERS, Identity(id=1))
    with pytest.raises(AuthorizationError):
        require_identity(ResourceKind.USERS, None)
    with pytest.raises(AuthorizationError):
        require_identity(ResourceKind.ORDERS, None, allow_anonymous_orders=False)
