"""
Error Types for the Brewery Search Gateway

Every failure a search can end in, with the HTTP status and JSON body it maps to.
"""
from typing import Any, Dict, List, Optional


class SearchError(Exception):
    """Base class for search failures surfaced as JSON"""
    status_code = 500

    def __init__(self, message: str = 'Internal server error'):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {'message': self.message}


class ValidationError(SearchError):
    """Malformed or out-of-range request parameters"""
    status_code = 400

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__('Invalid search parameters')
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {'errors': self.errors}


class AuthorizationError(SearchError):
    """Caller identity is required but missing or invalid"""
    status_code = 401

    def __init__(self, message: str = 'Authentication required'):
        super().__init__(message)


class UpstreamError(SearchError):
    """Brewery API was unreachable or answered with a non-success status"""

    def __init__(self, status_code: Optional[int], message: str, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code or 500
        self.detail = detail

    @classmethod
    def from_response(cls, response, default_message: str) -> 'UpstreamError':
        """
        Build an error from a non-2xx upstream response

        The upstream body's ``message`` replaces the default message and its
        ``errors`` become the detail; non-JSON bodies keep the default.
        """
        try:
            body = response.json()
        except ValueError:
            body = None

        message = default_message
        detail = None
        if isinstance(body, dict):
            message = body.get('message') or default_message
            detail = body.get('errors')
        return cls(response.status_code, message, detail)

    def to_dict(self) -> Dict[str, Any]:
        body = {'message': self.message}
        if self.detail is not None:
            body['error'] = self.detail
        return body


class MalformedRecord(SearchError):
    """A single upstream record could not be normalized"""

    def __init__(self, resource: str, reason: str):
        super().__init__(f'Malformed {resource} record: {reason}')
        self.resource = resource
        self.reason = reason
