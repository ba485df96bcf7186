"""
Marketplace API access: typed models and the HTTP client
"""
from .client import MarketplaceClient
from .models import Listing, Site

__all__ = [
    'MarketplaceClient',
    'Listing',
    'Site',
]
