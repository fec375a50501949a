"""
Authentication for the Brewery Search Gateway

Optional bearer-token authentication. A missing token means an anonymous
caller; a token that is present must verify against JWT_SECRET.

Token extraction:
    Authorization: Bearer <token>

Usage:
    bp.before_request(load_current_user)

    Anonymous callers reach the views with g.current_user set to None;
    SearchService decides which resources require an identity.
"""
import logging
from typing import Optional

import jwt
from flask import current_app, g, jsonify, request

from models import Identity

logger = logging.getLogger(__name__)


def get_bearer_token() -> Optional[str]:
    """Extract the bearer token from the Authorization header"""
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[7:].strip() or None
    return None


def decode_identity(token: str, secret: str) -> Identity:
    """
    Verify a token and read the caller out of its claims

    Args:
        token: Encoded HS256 JWT
        secret: Shared signing secret

    Returns:
        Identity built from the `id` (or `sub`) and `email` claims

    Raises:
        jwt.InvalidTokenError: bad signature, expired, or malformed
        ValueError: no usable id claim
    """
    claims = jwt.decode(token, secret, algorithms=['HS256'])
    raw_id = claims.get('id', claims.get('sub'))
    if raw_id is None:
        raise ValueError('token has no id claim')
    return Identity(id=int(raw_id), email=claims.get('email'))


def load_current_user():
    """
    before_request hook: attach g.current_user and g.bearer_token

    Returns a 401 response when a token is supplied but fails verification.
    With no JWT_SECRET configured every caller is treated as anonymous.
    """
    g.current_user = None
    g.bearer_token = get_bearer_token()

    if not g.bearer_token:
        return None

    secret = current_app.config.get('JWT_SECRET')
    if not secret:
        return None

    try:
        g.current_user = decode_identity(g.bearer_token, secret)
    except (jwt.InvalidTokenError, TypeError, ValueError) as e:
        logger.warning(f'Auth failed: invalid token for {request.path}: {e}')
        return jsonify({'message': 'Invalid token'}), 401

    logger.debug(f'Authenticated user {g.current_user.id} for {request.path}')
    return None
