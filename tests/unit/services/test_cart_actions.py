"""Tests unitarios para las acciones de carrito."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.domain.results import BackendError, CartActionFailure, Ok, TransportFailure
from storefront.services import cart_actions
from storefront.services.reshapers import reshape_cart

from conftest import cart_payload

CART_ID = "gid://shopify/Cart/abc"
VARIANT_ID = "gid://shopify/ProductVariant/classic-shirt-s"
LINE_ID = "gid://shopify/CartLine/1"


@pytest.fixture
def cart():
    return reshape_cart(cart_payload(CART_ID), default_currency="USD")


@pytest.fixture
def gateway(cart):
    gateway = MagicMock()
    gateway.get_cart = AsyncMock(return_value=Ok(cart))
    gateway.create_cart = AsyncMock(return_value=Ok(cart))
    gateway.add_to_cart = AsyncMock(return_value=Ok(cart))
    gateway.remove_from_cart = AsyncMock(return_value=Ok(cart))
    gateway.update_cart = AsyncMock(return_value=Ok(cart))
    return gateway


class TestAddItem:
    """Tests para add_item."""

    @pytest.mark.asyncio
    async def test_adds_line(self, gateway, cart):
        result = await cart_actions.add_item(gateway, CART_ID, VARIANT_ID, 2)

        assert result == Ok(cart)
        gateway.add_to_cart.assert_awaited_once_with(CART_ID, [{"merchandiseId": VARIANT_ID, "quantity": 2}])

    @pytest.mark.asyncio
    async def test_missing_cart_id_is_opaque_failure(self, gateway):
        """Debe fallar con mensaje genérico sin llamar al backend."""
        result = await cart_actions.add_item(gateway, None, VARIANT_ID)

        assert result == CartActionFailure(message="Error adding item to cart")
        gateway.add_to_cart.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_backend_details_are_hidden(self, gateway):
        """Debe ocultar los detalles del backend en el fallo."""
        gateway.add_to_cart.return_value = BackendError(message="Merchandise not found", cause="NOT_FOUND", status=404)

        result = await cart_actions.add_item(gateway, CART_ID, VARIANT_ID)

        assert isinstance(result, CartActionFailure)
        assert result.message == "Error adding item to cart"
        assert "NOT_FOUND" not in repr(result)


class TestRemoveItem:
    @pytest.mark.asyncio
    async def test_removes_line(self, gateway):
        result = await cart_actions.remove_item(gateway, CART_ID, LINE_ID)

        assert result.is_ok
        gateway.remove_from_cart.assert_awaited_once_with(CART_ID, [LINE_ID])

    @pytest.mark.asyncio
    async def test_transport_failure_is_opaque(self, gateway):
        gateway.remove_from_cart.return_value = TransportFailure(cause="timeout")

        result = await cart_actions.remove_item(gateway, CART_ID, LINE_ID)

        assert result == CartActionFailure(message="Error removing item from cart")


class TestUpdateItemQuantity:
    """Tests para update_item_quantity."""

    @pytest.mark.asyncio
    async def test_updates_matching_line(self, gateway):
        """Debe actualizar la línea que contiene la variante."""
        result = await cart_actions.update_item_quantity(gateway, CART_ID, VARIANT_ID, 5)

        assert result.is_ok
        gateway.update_cart.assert_awaited_once_with(
            CART_ID, [{"id": LINE_ID, "merchandiseId": VARIANT_ID, "quantity": 5}]
        )
        gateway.remove_from_cart.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_quantity_removes_line(self, gateway):
        """Debe eliminar la línea cuando la cantidad es 0."""
        await cart_actions.update_item_quantity(gateway, CART_ID, VARIANT_ID, 0)

        gateway.remove_from_cart.assert_awaited_once_with(CART_ID, [LINE_ID])
        gateway.update_cart.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_variant_fails(self, gateway):
        result = await cart_actions.update_item_quantity(gateway, CART_ID, "gid://shopify/ProductVariant/other", 1)

        assert result == CartActionFailure(message="Error updating item quantity")
        gateway.update_cart.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_cart_fails(self, gateway):
        gateway.get_cart.return_value = Ok(None)

        result = await cart_actions.update_item_quantity(gateway, CART_ID, VARIANT_ID, 1)

        assert isinstance(result, CartActionFailure)

    @pytest.mark.asyncio
    async def test_negative_quantity_fails_without_calls(self, gateway):
        result = await cart_actions.update_item_quantity(gateway, CART_ID, VARIANT_ID, -1)

        assert isinstance(result, CartActionFailure)
        gateway.get_cart.assert_not_awaited()


class TestEnsureCart:
    """Tests para ensure_cart."""

    @pytest.mark.asyncio
    async def test_existing_cart_is_reused(self, gateway, cart):
        assert await cart_actions.ensure_cart(gateway, CART_ID) == Ok(cart)
        gateway.create_cart.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_creates_cart_without_id(self, gateway):
        """Debe crear un carrito nuevo si no hay id."""
        result = await cart_actions.ensure_cart(gateway, None)

        assert result.is_ok
        gateway.get_cart.assert_not_awaited()
        gateway.create_cart.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_creates_cart_when_existing_is_gone(self, gateway):
        gateway.get_cart.return_value = Ok(None)

        await cart_actions.ensure_cart(gateway, CART_ID)

        gateway.create_cart.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_failure_is_opaque(self, gateway):
        gateway.create_cart.return_value = BackendError(message="boom")

        result = await cart_actions.ensure_cart(gateway, None)

        assert result == CartActionFailure(message="Error creating cart")
