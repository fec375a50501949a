"""
Utility Functions for the Brewery Search Gateway

Helpers for pagination and query-string validation.
"""
import logging
import math
from functools import wraps
from typing import List, Sequence, TypeVar

from flask import request
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from models import SearchParams, describe_param_errors

logger = logging.getLogger(__name__)

T = TypeVar('T')


def paginate(items: Sequence[T], page: int, limit: int) -> List[T]:
    """
    Slice one page out of a filtered sequence

    Args:
        items: Filtered records in upstream order
        page: 1-based page number
        limit: Page size

    Returns:
        Records in [(page-1)*limit, page*limit); empty when the page is past the end
    """
    start = (page - 1) * limit
    return list(items[start:start + limit])


def page_count(total: int, limit: int) -> int:
    """Number of pages a client needs to walk `total` records"""
    return math.ceil(total / limit) if total else 0


def validate_query(model=SearchParams):
    """
    Decorator to validate the query string before a search view runs

    The validated model is passed to the view as the `params` keyword.
    Every violation is reported at once as a ValidationError.

    Usage:
        @validate_query()
        def my_endpoint(params):
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            raw = request.args.to_dict()
            try:
                params = model.model_validate(raw)
            except PydanticValidationError as e:
                errors = describe_param_errors(e, raw)
                logger.info(f'Rejected {request.path}: {len(errors)} invalid parameter(s)')
                raise ValidationError(errors) from e
            return f(*args, params=params, **kwargs)
        return decorated_function
    return decorator
