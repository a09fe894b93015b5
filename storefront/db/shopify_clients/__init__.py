"""
Storefront API clients organized by responsibility.

- BaseStorefrontClient: transport (session, cache, classification)
- StorefrontCatalogClient: menu, products and collections
- StorefrontCartClient: cart query and mutations
- StorefrontGateway: unified client sharing one session
"""

from .base_client import BaseStorefrontClient, TransportResponse
from .cart_client import StorefrontCartClient
from .catalog_client import StorefrontCatalogClient
from .unified_client import StorefrontGateway, close_gateway, get_gateway, initialize_gateway

__all__ = [
    "BaseStorefrontClient",
    "TransportResponse",
    "StorefrontCatalogClient",
    "StorefrontCartClient",
    "StorefrontGateway",
    "initialize_gateway",
    "get_gateway",
    "close_gateway",
]
