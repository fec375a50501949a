"""Services package initialization"""
from .brewery_client import BreweryClient
from .search_service import SearchResult, SearchService

__all__ = [
    'BreweryClient',
    'SearchResult',
    'SearchService',
]
