"""Routes package initialization"""
from .main_routes import main_bp
from .search_routes import search_bp

__all__ = ['main_bp', 'search_bp']
