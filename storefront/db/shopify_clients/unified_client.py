"""
Unified Storefront gateway that combines the specialized clients.

The gateway owns one HTTP session shared by the catalog and cart clients
and exposes every Storefront operation behind a single interface.
"""

import logging
from typing import Any, Dict, List, Optional

from storefront.core.cache_manager import TagCache
from storefront.core.config import Settings
from storefront.domain.models import Cart, Collection, Menu, Product
from storefront.domain.results import Result

from .base_client import BaseStorefrontClient
from .cart_client import StorefrontCartClient
from .catalog_client import StorefrontCatalogClient

logger = logging.getLogger(__name__)


class StorefrontGateway(BaseStorefrontClient):
    """
    Unified Storefront client that combines catalog and cart functionality.
    """

    def __init__(self, cache: Optional[TagCache] = None, settings: Optional[Settings] = None):
        """Initialize the gateway with all specialized clients."""
        super().__init__(cache=cache, settings=settings)

        self.catalog = StorefrontCatalogClient(cache=cache, settings=self.settings)
        self.cart = StorefrontCartClient(cache=cache, settings=self.settings)

    async def initialize(self):
        """
        Initialize the shared session and hand it to the specialized clients.
        """
        await super().initialize()
        self._share_session()
        logger.info("✅ Storefront gateway initialized with all specialized clients")

    def _share_session(self):
        for client in (self.catalog, self.cart):
            client.graphql_url = self.graphql_url
            client.session = self.session

    async def close(self):
        """Close the shared session once."""
        await super().close()
        for client in (self.catalog, self.cart):
            client.session = None

    # =============================================================================
    # CATALOG OPERATIONS - Delegate to CatalogClient
    # =============================================================================

    async def get_menu(self, handle: Optional[str] = None) -> Result[List[Menu]]:
        """Delegate to catalog client."""
        return await self.catalog.get_menu(handle)

    async def get_products(
        self,
        query: Optional[str] = None,
        reverse: Optional[bool] = None,
        sort_key: Optional[str] = None,
    ) -> Result[List[Product]]:
        """Delegate to catalog client."""
        return await self.catalog.get_products(query=query, reverse=reverse, sort_key=sort_key)

    async def get_product(self, handle: str) -> Result[Optional[Product]]:
        """Delegate to catalog client."""
        return await self.catalog.get_product(handle)

    async def get_product_recommendations(self, product_id: str) -> Result[List[Product]]:
        """Delegate to catalog client."""
        return await self.catalog.get_product_recommendations(product_id)

    async def get_collections(self) -> Result[List[Collection]]:
        """Delegate to catalog client."""
        return await self.catalog.get_collections()

    async def get_collection(self, handle: str) -> Result[Optional[Collection]]:
        """Delegate to catalog client."""
        return await self.catalog.get_collection(handle)

    async def get_collection_products(
        self,
        handle: str,
        reverse: Optional[bool] = None,
        sort_key: Optional[str] = None,
    ) -> Result[List[Product]]:
        """Delegate to catalog client."""
        return await self.catalog.get_collection_products(handle, reverse=reverse, sort_key=sort_key)

    # =============================================================================
    # CART OPERATIONS - Delegate to CartClient
    # =============================================================================

    async def get_cart(self, cart_id: Optional[str]) -> Result[Optional[Cart]]:
        """Delegate to cart client."""
        return await self.cart.get_cart(cart_id)

    async def create_cart(self, lines: Optional[List[Dict[str, Any]]] = None) -> Result[Cart]:
        """Delegate to cart client."""
        return await self.cart.create_cart(lines)

    async def add_to_cart(self, cart_id: Optional[str], lines: List[Dict[str, Any]]) -> Result[Cart]:
        """Delegate to cart client."""
        return await self.cart.add_to_cart(cart_id, lines)

    async def remove_from_cart(self, cart_id: Optional[str], line_ids: List[str]) -> Result[Cart]:
        """Delegate to cart client."""
        return await self.cart.remove_from_cart(cart_id, line_ids)

    async def update_cart(self, cart_id: Optional[str], lines: List[Dict[str, Any]]) -> Result[Cart]:
        """Delegate to cart client."""
        return await self.cart.update_cart(cart_id, lines)


# Global gateway instance
_gateway: Optional[StorefrontGateway] = None


async def initialize_gateway(cache: Optional[TagCache] = None) -> StorefrontGateway:
    """Create and initialize the global gateway."""
    global _gateway

    if _gateway is None:
        _gateway = StorefrontGateway(cache=cache)
        await _gateway.initialize()
    return _gateway


def get_gateway() -> StorefrontGateway:
    """
    Return the global gateway (FastAPI dependency).

    Raises:
        RuntimeError: If the gateway was not initialized
    """
    if _gateway is None:
        raise RuntimeError("Storefront gateway not initialized")
    return _gateway


async def close_gateway():
    """Close the global gateway session."""
    global _gateway

    if _gateway is not None:
        await _gateway.close()
        _gateway = None
