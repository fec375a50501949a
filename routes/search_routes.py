"""
Search Routes for the Brewery Search Gateway

One GET endpoint per resource collection, all returning {results, total}.
"""
import logging

from flask import Blueprint, current_app, g, jsonify
from werkzeug.exceptions import HTTPException

from auth import load_current_user
from errors import SearchError
from models import ResourceKind
from utils import validate_query

logger = logging.getLogger(__name__)

search_bp = Blueprint('search', __name__)
search_bp.before_request(load_current_user)


@search_bp.errorhandler(SearchError)
def handle_search_error(e):
    return jsonify(e.to_dict()), e.status_code


@search_bp.errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    logger.error(f'Unhandled search error: {e}', exc_info=True)
    return jsonify({'message': 'Internal server error'}), 500


def _respond(kind: ResourceKind, params):
    service = current_app.search_service
    result = service.search(kind, params, identity=g.current_user, token=g.bearer_token)
    return jsonify(result.to_dict(current_app.config['RESPONSE_FIELD_CASE'])), 200


@search_bp.route('/inventory')
@validate_query()
def search_inventory(params):
    """Search inventory by query, type and flavor"""
    return _respond(ResourceKind.INVENTORY, params)


@search_bp.route('/orders')
@validate_query()
def search_orders(params):
    """Search orders by id/owner and status, scoped to the caller"""
    return _respond(ResourceKind.ORDERS, params)


@search_bp.route('/users')
@validate_query()
def search_users(params):
    """Search users by name or email (authenticated callers only)"""
    return _respond(ResourceKind.USERS, params)


@search_bp.route('/reviews')
@validate_query()
def search_reviews(params):
    """Search reviews by message text or exact rating"""
    return _respond(ResourceKind.REVIEWS, params)
