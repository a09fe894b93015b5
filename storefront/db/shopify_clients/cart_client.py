"""
Storefront client for cart reads and writes.

The cart id is always passed in explicitly; this client never reads
cookies. Successful writes invalidate the ``cart`` tag before returning.
"""

import logging
from typing import Any, Dict, List, Optional

from storefront.db.operations import ADD_TO_CART, CREATE_CART, GET_CART, REMOVE_FROM_CART, UPDATE_CART
from storefront.domain.models import Cart
from storefront.domain.results import Ok, Result
from storefront.services.reshapers import reshape_cart

from .base_client import BaseStorefrontClient

logger = logging.getLogger(__name__)


class StorefrontCartClient(BaseStorefrontClient):
    """
    Client for cart operations.
    """

    async def get_cart(self, cart_id: Optional[str]) -> Result[Optional[Cart]]:
        """
        Get a cart by id.

        Args:
            cart_id: Opaque cart id; when absent no request is made

        Returns:
            Result[Optional[Cart]]: Ok(None) for an absent or unknown cart
        """
        if not cart_id:
            return Ok(None)

        result = await self._run_operation(GET_CART, {"cartId": cart_id})
        return result.map(lambda data: reshape_cart(data.cart, self.settings.DEFAULT_CURRENCY_CODE))

    async def create_cart(self, lines: Optional[List[Dict[str, Any]]] = None) -> Result[Cart]:
        """Create a new cart, optionally with initial lines."""
        result = await self._run_operation(CREATE_CART, {"lineItems": lines})
        return result.map(lambda data: reshape_cart(data.cartCreate.cart, self.settings.DEFAULT_CURRENCY_CODE))

    async def add_to_cart(self, cart_id: Optional[str], lines: List[Dict[str, Any]]) -> Result[Cart]:
        """
        Add lines to a cart.

        Args:
            cart_id: Cart id (required)
            lines: [{"merchandiseId": str, "quantity": int >= 1}, ...]
        """
        result = await self._run_operation(ADD_TO_CART, {"cartId": cart_id, "lines": lines})
        return result.map(lambda data: reshape_cart(data.cartLinesAdd.cart, self.settings.DEFAULT_CURRENCY_CODE))

    async def remove_from_cart(self, cart_id: Optional[str], line_ids: List[str]) -> Result[Cart]:
        """Remove lines from a cart by line id."""
        result = await self._run_operation(REMOVE_FROM_CART, {"cartId": cart_id, "lineIds": line_ids})
        return result.map(
            lambda data: reshape_cart(data.cartLinesRemove.cart, self.settings.DEFAULT_CURRENCY_CODE)
        )

    async def update_cart(self, cart_id: Optional[str], lines: List[Dict[str, Any]]) -> Result[Cart]:
        """
        Update quantities of existing lines.

        Args:
            cart_id: Cart id (required)
            lines: [{"id": str, "merchandiseId": str, "quantity": int}, ...]
        """
        result = await self._run_operation(UPDATE_CART, {"cartId": cart_id, "lines": lines})
        return result.map(
            lambda data: reshape_cart(data.cartLinesUpdate.cart, self.settings.DEFAULT_CURRENCY_CODE)
        )
