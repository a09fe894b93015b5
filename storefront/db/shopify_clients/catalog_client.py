"""
Storefront client for catalog reads: menu, products and collections.
"""

import logging
from typing import List, Optional

from storefront.db.operations import (
    GET_COLLECTION,
    GET_COLLECTION_PRODUCTS,
    GET_COLLECTIONS,
    GET_MENU,
    GET_PRODUCT,
    GET_PRODUCT_RECOMMENDATIONS,
    GET_PRODUCTS,
)
from storefront.domain.models import Collection, Menu, Product
from storefront.domain.results import Ok, Result
from storefront.services.reshapers import (
    flatten,
    reshape_collection,
    reshape_collections,
    reshape_menu,
    reshape_product,
    reshape_products,
)

from .base_client import BaseStorefrontClient

logger = logging.getLogger(__name__)


class StorefrontCatalogClient(BaseStorefrontClient):
    """
    Client for read-only catalog operations.

    Every method returns a Result holding normalized domain models. Missing
    entities are empty results, never failures.
    """

    async def get_menu(self, handle: Optional[str] = None) -> Result[List[Menu]]:
        """
        Get a navigation menu.

        Args:
            handle: Menu handle (defaults to MENU_HANDLE)

        Returns:
            Result[List[Menu]]: Menu entries with storefront paths
        """
        result = await self._run_operation(GET_MENU, {"handle": handle or self.settings.MENU_HANDLE})
        return result.map(lambda data: reshape_menu(data.menu.items if data.menu else [], self.settings.store_domain))

    async def get_products(
        self,
        query: Optional[str] = None,
        reverse: Optional[bool] = None,
        sort_key: Optional[str] = None,
    ) -> Result[List[Product]]:
        """
        Search products.

        Args:
            query: Backend search query
            reverse: Reverse the sort order
            sort_key: ProductSortKeys value (e.g. PRICE, CREATED_AT)
        """
        variables = {"query": query, "reverse": reverse, "sortKey": sort_key}
        result = await self._run_operation(GET_PRODUCTS, variables)
        return result.map(lambda data: reshape_products(flatten(data.products), self.settings.HIDDEN_PRODUCT_TAG))

    async def get_product(self, handle: str) -> Result[Optional[Product]]:
        """Get a single product by handle, hidden products included."""
        result = await self._run_operation(GET_PRODUCT, {"handle": handle})
        return result.map(lambda data: reshape_product(data.product, filter_hidden=False))

    async def get_product_recommendations(self, product_id: str) -> Result[List[Product]]:
        """Get products recommended for a product id."""
        result = await self._run_operation(GET_PRODUCT_RECOMMENDATIONS, {"productId": product_id})
        return result.map(
            lambda data: reshape_products(data.productRecommendations or [], self.settings.HIDDEN_PRODUCT_TAG)
        )

    async def get_collections(self) -> Result[List[Collection]]:
        """
        List collections for navigation.

        The listing starts with the synthetic "All" collection; collections
        whose handle starts with HIDDEN_COLLECTION_PREFIX are left out.
        """
        result = await self._run_operation(GET_COLLECTIONS)
        if not result.is_ok:
            return result

        prefix = self.settings.HIDDEN_COLLECTION_PREFIX
        visible = [
            collection
            for collection in reshape_collections(flatten(result.value.collections))
            if not collection.handle.startswith(prefix)
        ]
        return Ok([Collection.all_products(), *visible])

    async def get_collection(self, handle: str) -> Result[Optional[Collection]]:
        """Get a single collection by handle."""
        result = await self._run_operation(GET_COLLECTION, {"handle": handle})
        return result.map(lambda data: reshape_collection(data.collection))

    async def get_collection_products(
        self,
        handle: str,
        reverse: Optional[bool] = None,
        sort_key: Optional[str] = None,
    ) -> Result[List[Product]]:
        """
        Get the products of a collection.

        Collection product sort keys name creation date CREATED, so
        CREATED_AT is rewritten before sending.
        """
        variables = {
            "handle": handle,
            "reverse": reverse,
            "sortKey": "CREATED" if sort_key == "CREATED_AT" else sort_key,
        }
        result = await self._run_operation(GET_COLLECTION_PRODUCTS, variables)
        if not result.is_ok:
            return result

        collection = result.value.collection
        if collection is None:
            logger.info(f"No collection found for `{handle}`")
            return Ok([])

        return Ok(reshape_products(flatten(collection.products), self.settings.HIDDEN_PRODUCT_TAG))
