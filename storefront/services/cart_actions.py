"""
Acciones de carrito usadas por la API JSON.

Envuelven al gateway y reducen cualquier fallo (cart id ausente, variables
inválidas, error del backend o de transporte) a un único CartActionFailure
con un mensaje genérico. Los detalles solo se registran en el log.
"""

import logging
from typing import Optional, Union

from storefront.db.shopify_clients.unified_client import StorefrontGateway
from storefront.domain.models import Cart
from storefront.domain.results import CartActionFailure, Ok

logger = logging.getLogger(__name__)

ADD_ITEM_ERROR = "Error adding item to cart"
REMOVE_ITEM_ERROR = "Error removing item from cart"
UPDATE_ITEM_ERROR = "Error updating item quantity"
CREATE_CART_ERROR = "Error creating cart"

CartActionResult = Union[Ok[Cart], CartActionFailure]


def _opaque(result, message: str, action: str) -> CartActionResult:
    """Devuelve el resultado si es Ok; si no, un fallo opaco."""
    if result.is_ok and result.value is not None:
        return result
    logger.warning(f"Cart action '{action}' failed: {result}")
    return CartActionFailure(message=message)


async def add_item(
    gateway: StorefrontGateway,
    cart_id: Optional[str],
    merchandise_id: Optional[str],
    quantity: int = 1,
) -> CartActionResult:
    """
    Agrega una variante al carrito.

    Args:
        gateway: Gateway de Storefront
        cart_id: Id del carrito (cookie)
        merchandise_id: Id de la variante seleccionada
        quantity: Cantidad a agregar

    Returns:
        Ok[Cart] o CartActionFailure("Error adding item to cart")
    """
    if not cart_id or not merchandise_id:
        logger.info("add_item called without cart id or merchandise id")
        return CartActionFailure(message=ADD_ITEM_ERROR)

    result = await gateway.add_to_cart(cart_id, [{"merchandiseId": merchandise_id, "quantity": quantity}])
    return _opaque(result, ADD_ITEM_ERROR, "add_item")


async def remove_item(gateway: StorefrontGateway, cart_id: Optional[str], line_id: Optional[str]) -> CartActionResult:
    """Elimina una línea del carrito."""
    if not cart_id or not line_id:
        return CartActionFailure(message=REMOVE_ITEM_ERROR)

    result = await gateway.remove_from_cart(cart_id, [line_id])
    return _opaque(result, REMOVE_ITEM_ERROR, "remove_item")


async def update_item_quantity(
    gateway: StorefrontGateway,
    cart_id: Optional[str],
    merchandise_id: Optional[str],
    quantity: int,
) -> CartActionResult:
    """
    Cambia la cantidad de la línea que contiene una variante.

    Con cantidad 0 la línea se elimina.
    """
    if not cart_id or not merchandise_id or quantity < 0:
        return CartActionFailure(message=UPDATE_ITEM_ERROR)

    current = await gateway.get_cart(cart_id)
    if not current.is_ok or current.value is None:
        logger.warning(f"Cart action 'update_item_quantity' could not load cart: {current}")
        return CartActionFailure(message=UPDATE_ITEM_ERROR)

    line = current.value.find_line(merchandise_id)
    if line is None:
        logger.warning(f"No line for merchandise {merchandise_id} in cart")
        return CartActionFailure(message=UPDATE_ITEM_ERROR)

    if quantity == 0:
        result = await gateway.remove_from_cart(cart_id, [line.id])
    else:
        result = await gateway.update_cart(
            cart_id,
            [{"id": line.id, "merchandiseId": merchandise_id, "quantity": quantity}],
        )
    return _opaque(result, UPDATE_ITEM_ERROR, "update_item_quantity")


async def ensure_cart(gateway: StorefrontGateway, cart_id: Optional[str]) -> CartActionResult:
    """
    Devuelve el carrito existente o crea uno nuevo.

    El llamador es responsable de guardar el id del carrito nuevo.
    """
    if cart_id:
        existing = await gateway.get_cart(cart_id)
        if existing.is_ok and existing.value is not None:
            return existing
        if not existing.is_ok:
            logger.warning(f"Could not load cart, creating a new one: {existing}")

    result = await gateway.create_cart()
    return _opaque(result, CREATE_CART_ERROR, "ensure_cart")
