"""
Data Models for the Brewery Search Gateway

Pydantic models for canonical upstream records and search request validation.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel, to_pascal


class ResourceKind(str, Enum):
    """Searchable collections served by the brewery API"""
    INVENTORY = 'inventory'
    ORDERS = 'orders'
    USERS = 'users'
    REVIEWS = 'reviews'

    @property
    def default_error_message(self) -> str:
        return f'Error searching {self.value}'


@dataclass(frozen=True)
class Identity:
    """Verified caller attached by the auth middleware"""
    id: int
    email: Optional[str] = None


def _accepted_names(field_name: str) -> AliasChoices:
    # Upstream drafts send PascalCase or camelCase
    return AliasChoices(to_pascal(field_name), to_camel(field_name))


_INTEGER_TEXT = re.compile(r'[+-]?[0-9]+')


def _parse_integer(v):
    """Strict base-10 integer parse: no booleans, floats or '1.0'-style text"""
    if isinstance(v, (bool, float)):
        raise ValueError(f'expected an integer, got {type(v).__name__}')
    if isinstance(v, str):
        text = v.strip()
        if not _INTEGER_TEXT.fullmatch(text):
            raise ValueError(f'{v!r} is not a base-10 integer')
        return int(text)
    return v


def _reject_boolean(v):
    if isinstance(v, bool):
        raise ValueError('expected a number, got bool')
    return v


UpstreamInt = Annotated[int, BeforeValidator(_parse_integer)]
UpstreamFloat = Annotated[float, BeforeValidator(_reject_boolean)]


class CanonicalRecord(BaseModel):
    """Base for normalized upstream records (immutable once built)"""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        allow_inf_nan=False,
        alias_generator=AliasGenerator(
            validation_alias=_accepted_names,
            serialization_alias=to_pascal,
        ),
    )

    def to_public(self, field_case: str = 'pascal') -> Dict[str, Any]:
        """
        Render the record with public field names

        Args:
            field_case: 'pascal' (Id, TasteProfile) or 'camel' (id, tasteProfile)

        Returns:
            JSON-ready dictionary; unset optional fields are omitted
        """
        data = self.model_dump(mode='json', by_alias=True, exclude_none=True)
        if field_case == 'camel':
            return _camel_keys(data)
        return data


def _camel_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {key[:1].lower() + key[1:]: _camel_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_camel_keys(item) for item in value]
    return value


class TasteProfile(CanonicalRecord):
    primary_flavor: Optional[str] = None
    sweetness: Optional[str] = None
    bitterness: Optional[str] = None


class InventoryRecord(CanonicalRecord):
    id: UpstreamInt
    name: str
    type: str
    description: str
    taste_profile: TasteProfile = Field(default_factory=TasteProfile)

    @field_validator('taste_profile', mode='before')
    @classmethod
    def missing_profile_is_empty(cls, v):
        return {} if v is None else v


class OrderRecord(CanonicalRecord):
    id: UpstreamInt
    owner_id: UpstreamInt = Field(
        validation_alias=AliasChoices('UserId', 'userId', 'OwnerId', 'ownerId'),
        serialization_alias='UserId',
    )
    total_price: UpstreamFloat
    status: str


class UserRecord(CanonicalRecord):
    id: UpstreamInt
    name: str
    email: str


class ReviewRecord(CanonicalRecord):
    id: UpstreamInt
    user_id: UpstreamInt
    product_id: UpstreamInt
    rating: UpstreamFloat = Field(
        validation_alias=AliasChoices('ReviewRating', 'reviewRating', 'Rating', 'rating'),
        serialization_alias='ReviewRating',
    )
    message: str = Field(
        validation_alias=AliasChoices('ReviewMessage', 'reviewMessage', 'Message', 'message'),
        serialization_alias='ReviewMessage',
    )
    created_at: datetime
    created_at_text: Optional[str] = Field(default=None, exclude=True)

    @model_validator(mode='before')
    @classmethod
    def keep_timestamp_text(cls, data):
        # CreatedAt is echoed back exactly as the upstream wrote it
        if not isinstance(data, dict):
            return data
        for key in ('CreatedAt', 'createdAt', 'created_at'):
            if isinstance(data.get(key), str):
                return {**data, 'created_at_text': data[key]}
        return data

    @field_serializer('created_at')
    def upstream_timestamp(self, value: datetime) -> str:
        return self.created_at_text or value.isoformat()


RECORD_MODELS = {
    ResourceKind.INVENTORY: InventoryRecord,
    ResourceKind.ORDERS: OrderRecord,
    ResourceKind.USERS: UserRecord,
    ResourceKind.REVIEWS: ReviewRecord,
}


_PARAM_MESSAGES = {
    'page': 'Page must be a positive integer',
    'limit': 'Limit must be a positive integer',
}


class SearchParams(BaseModel):
    """Query string parameters shared by every search endpoint"""
    model_config = ConfigDict(str_strip_whitespace=True, extra='ignore')

    query: Optional[str] = Field(default=None, max_length=200)
    type: Optional[str] = Field(default=None, max_length=100)
    flavor: Optional[str] = Field(default=None, max_length=100)
    status: Optional[str] = Field(default=None, max_length=100)
    page: int = Field(default=1, gt=0)
    limit: int = Field(default=10, gt=0)

    @field_validator('query', 'type', 'flavor', 'status')
    @classmethod
    def blank_is_absent(cls, v):
        return v or None


def describe_param_errors(exc: PydanticValidationError, raw: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Convert pydantic errors into the gateway's 400 error list

    Args:
        exc: Validation error raised for SearchParams
        raw: The raw query arguments that were validated

    Returns:
        List of {msg, param, location, value} dictionaries, one per violation
    """
    errors = []
    for error in exc.errors():
        param = str(error['loc'][0]) if error['loc'] else ''
        errors.append({
            'msg': _PARAM_MESSAGES.get(param, error['msg']),
            'param': param,
            'location': 'query',
            'value': raw.get(param),
        })
    return errors
