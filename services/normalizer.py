"""
Record Normalizer

Coerces loosely typed upstream records into canonical records.
"""
import logging
from typing import Any, Iterable, List

from pydantic import ValidationError as PydanticValidationError

from errors import MalformedRecord
from models import RECORD_MODELS, CanonicalRecord, ResourceKind

logger = logging.getLogger(__name__)


def _reason(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = '.'.join(str(loc) for loc in error['loc']) or 'record'
        parts.append(f"{field}: {error['msg']}")
    return '; '.join(parts)


def normalize(kind: ResourceKind, raw: Any) -> CanonicalRecord:
    """
    Build the canonical record for one raw upstream record

    Args:
        kind: Resource kind the record belongs to
        raw: Decoded JSON object from the brewery API

    Returns:
        Immutable canonical record

    Raises:
        MalformedRecord: required field missing or a number failed to parse
    """
    if not isinstance(raw, dict):
        raise MalformedRecord(kind.value, f'expected an object, got {type(raw).__name__}')
    try:
        return RECORD_MODELS[kind].model_validate(raw)
    except PydanticValidationError as e:
        raise MalformedRecord(kind.value, _reason(e)) from e


def normalize_collection(kind: ResourceKind, raws: Iterable[Any]) -> List[CanonicalRecord]:
    """Normalize a collection, dropping (and logging) malformed records"""
    records = []
    for index, raw in enumerate(raws):
        try:
            records.append(normalize(kind, raw))
        except MalformedRecord as e:
            logger.warning(f'Dropping {kind.value} record at index {index}: {e.reason}')
    return records
