"""
Main Routes for the Brewery Search Gateway

Liveness check.
"""
from flask import Blueprint

main_bp = Blueprint('main', __name__)


@main_bp.route('/healthcheck')
def healthcheck():
    """Plain-text liveness probe"""
    return "Saurons eye is watching you", 200, {'Content-Type': 'text/plain; charset=utf-8'}
