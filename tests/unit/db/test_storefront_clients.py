"""Tests unitarios para los clientes de catálogo y carrito."""

from unittest.mock import AsyncMock

import pytest

from storefront.core.cache_manager import MemoryTagCache
from storefront.core.cache_tags import CacheTag
from storefront.db.shopify_clients.cart_client import StorefrontCartClient
from storefront.db.shopify_clients.catalog_client import StorefrontCatalogClient
from storefront.db.shopify_clients.unified_client import StorefrontGateway
from storefront.domain.results import BackendError, Ok, ValidationFailure

from conftest import cart_payload, collection_payload, connection, product_payload


class RecordingTagCache(MemoryTagCache):
    """MemoryTagCache que registra cada invalidación."""

    def __init__(self):
        super().__init__()
        self.invalidations = []

    async def invalidate(self, tags):
        self.invalidations.append(list(tags))
        return await super().invalidate(tags)


def _catalog(body, cache=None):
    client = StorefrontCatalogClient(cache=cache or MemoryTagCache())
    client._send = AsyncMock(return_value=(200, body))
    return client


def _cart(body, cache=None):
    client = StorefrontCartClient(cache=cache or MemoryTagCache())
    client._send = AsyncMock(return_value=(200, body))
    return client


class TestCatalogClient:
    """Tests para StorefrontCatalogClient."""

    @pytest.mark.asyncio
    async def test_collections_start_with_all_and_skip_hidden(self):
        """Debe anteponer 'All' y omitir colecciones ocultas."""
        body = {
            "data": {
                "collections": connection(
                    [
                        collection_payload("shirts", "Shirts"),
                        collection_payload("hidden-homepage-featured", "Featured"),
                        collection_payload("pants", "Pants"),
                    ]
                )
            }
        }
        client = _catalog(body)

        result = await client.get_collections()

        assert [(c.handle, c.path) for c in result.value] == [
            ("", "/search"),
            ("shirts", "/search/shirts"),
            ("pants", "/search/pants"),
        ]

    @pytest.mark.asyncio
    async def test_collection_products_rewrite_created_at(self):
        """Debe enviar CREATED en lugar de CREATED_AT para productos de colección."""
        body = {"data": {"collection": {"products": connection([product_payload()])}}}
        client = _catalog(body)

        result = await client.get_collection_products("shirts", reverse=True, sort_key="CREATED_AT")

        assert [p.handle for p in result.value] == ["classic-shirt"]
        variables = client._send.await_args.args[0]["variables"]
        assert variables == {"handle": "shirts", "reverse": True, "sortKey": "CREATED"}

    @pytest.mark.asyncio
    async def test_product_search_keeps_created_at(self):
        client = _catalog({"data": {"products": connection([])}})

        await client.get_products(sort_key="CREATED_AT", reverse=True)

        assert client._send.await_args.args[0]["variables"]["sortKey"] == "CREATED_AT"

    @pytest.mark.asyncio
    async def test_missing_collection_is_empty_list(self):
        """Debe devolver lista vacía cuando la colección no existe."""
        client = _catalog({"data": {"collection": None}})

        result = await client.get_collection_products("does-not-exist")

        assert result == Ok([])

    @pytest.mark.asyncio
    async def test_product_search_filters_hidden(self):
        products = [product_payload("a"), product_payload("b", tags=["nextjs-frontend-hidden"])]
        client = _catalog({"data": {"products": connection(products)}})

        result = await client.get_products(query="shirt")

        assert [p.handle for p in result.value] == ["a"]

    @pytest.mark.asyncio
    async def test_single_product_includes_hidden(self):
        """Debe devolver productos ocultos al pedirlos por handle."""
        client = _catalog({"data": {"product": product_payload(tags=["nextjs-frontend-hidden"])}})

        result = await client.get_product("classic-shirt")

        assert result.value is not None
        assert result.value.handle == "classic-shirt"

    @pytest.mark.asyncio
    async def test_missing_product_is_none(self):
        client = _catalog({"data": {"product": None}})
        assert await client.get_product("nope") == Ok(None)

    @pytest.mark.asyncio
    async def test_menu_paths(self):
        domain = "https://your-shop.myshopify.com"
        body = {"data": {"menu": {"items": [{"title": "Shirts", "url": f"{domain}/collections/shirts"}]}}}
        client = _catalog(body)

        result = await client.get_menu()

        assert result.value[0].path == "/search/shirts"

    @pytest.mark.asyncio
    async def test_unknown_product_has_no_recommendations(self):
        """Debe devolver lista vacía cuando Shopify no conoce el producto."""
        client = _catalog({"data": {"productRecommendations": None}})

        result = await client.get_product_recommendations("gid://shopify/Product/unknown")

        assert result == Ok([])

    @pytest.mark.asyncio
    async def test_recommendations_drop_hidden_and_null(self):
        products = [product_payload("a"), None, product_payload("b", tags=["nextjs-frontend-hidden"])]
        client = _catalog({"data": {"productRecommendations": products}})

        result = await client.get_product_recommendations("gid://shopify/Product/1")

        assert [p.handle for p in result.value] == ["a"]

    @pytest.mark.asyncio
    async def test_menu_items_without_url_are_skipped(self):
        """Debe omitir items del menú sin url en lugar de fallar."""
        domain = "https://your-shop.myshopify.com"
        items = [
            {"title": "Shoes", "url": f"{domain}/collections/shoes"},
            {"title": "Header", "url": None},
        ]
        client = _catalog({"data": {"menu": {"items": items}}})

        result = await client.get_menu()

        assert [(entry.title, entry.path) for entry in result.value] == [("Shoes", "/search/shoes")]

    @pytest.mark.asyncio
    async def test_missing_menu_is_empty(self):
        client = _catalog({"data": {"menu": None}})
        assert await client.get_menu("footer") == Ok([])

    @pytest.mark.asyncio
    async def test_backend_error_propagates(self):
        client = _catalog({"errors": [{"message": "Access denied", "extensions": {"code": "ACCESS_DENIED"}}]})

        result = await client.get_collections()

        assert isinstance(result, BackendError)
        assert result.message == "Access denied"


class TestCartClient:
    """Tests para StorefrontCartClient."""

    @pytest.mark.asyncio
    async def test_absent_cart_id_makes_no_request(self):
        """Debe devolver Ok(None) sin llamar al backend si no hay cart id."""
        client = _cart({})

        assert await client.get_cart(None) == Ok(None)
        client._send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_to_cart_invalidates_cart_once(self):
        """Debe invalidar el tag 'cart' exactamente una vez tras una escritura exitosa."""
        cache = RecordingTagCache()
        client = _cart({"data": {"cartLinesAdd": {"cart": cart_payload()}}}, cache)

        result = await client.add_to_cart("gid://shopify/Cart/abc", [{"merchandiseId": "v1", "quantity": 1}])

        assert result.is_ok
        assert result.value.totalQuantity == 2
        assert cache.invalidations == [[CacheTag.CART.value]]

    @pytest.mark.asyncio
    async def test_add_to_cart_without_cart_id_is_validation_failure(self):
        client = _cart({})

        result = await client.add_to_cart("", [{"merchandiseId": "v1", "quantity": 1}])

        assert isinstance(result, ValidationFailure)
        client._send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_to_cart_with_absent_cart_id_skips_network(self):
        client = _cart({})

        result = await client.add_to_cart(None, [{"merchandiseId": "v1", "quantity": 1}])

        assert isinstance(result, ValidationFailure)
        assert result.field == "cartId"
        client._send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_to_cart_rejects_zero_quantity(self):
        client = _cart({})

        result = await client.add_to_cart("gid://shopify/Cart/abc", [{"merchandiseId": "v1", "quantity": 0}])

        assert isinstance(result, ValidationFailure)
        client._send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_write_does_not_invalidate(self):
        """Debe no invalidar el cache si la escritura falla."""
        cache = RecordingTagCache()
        client = _cart({"errors": [{"message": "Invalid cart"}]}, cache)

        result = await client.remove_from_cart("gid://shopify/Cart/abc", ["line-1"])

        assert isinstance(result, BackendError)
        assert cache.invalidations == []

    @pytest.mark.asyncio
    async def test_cached_cart_is_refetched_after_write(self):
        """Debe volver a pedir el carrito después de modificarlo."""
        cache = MemoryTagCache()
        client = _cart({"data": {"cart": cart_payload()}}, cache)

        await client.get_cart("gid://shopify/Cart/abc")
        await client.get_cart("gid://shopify/Cart/abc")
        assert client._send.await_count == 1

        client._send.return_value = (200, {"data": {"cartLinesUpdate": {"cart": cart_payload()}}})
        await client.update_cart(
            "gid://shopify/Cart/abc",
            [{"id": "gid://shopify/CartLine/1", "merchandiseId": "v1", "quantity": 3}],
        )

        client._send.return_value = (200, {"data": {"cart": cart_payload()}})
        await client.get_cart("gid://shopify/Cart/abc")
        assert client._send.await_count == 3

    @pytest.mark.asyncio
    async def test_create_cart_without_lines(self):
        client = _cart({"data": {"cartCreate": {"cart": cart_payload()}}})

        result = await client.create_cart()

        assert result.value.id == "gid://shopify/Cart/abc"
        assert client._send.await_args.args[0]["variables"] == {}


class TestStorefrontGateway:
    """Tests para el gateway unificado."""

    @pytest.mark.asyncio
    async def test_initialize_shares_one_session(self):
        gateway = StorefrontGateway(cache=MemoryTagCache())
        await gateway.initialize()
        try:
            assert gateway.session is not None
            assert gateway.catalog.session is gateway.session
            assert gateway.cart.session is gateway.session
        finally:
            await gateway.close()

        assert gateway.catalog.session is None
        assert gateway.cart.session is None

    @pytest.mark.asyncio
    async def test_delegates_to_specialized_clients(self):
        gateway = StorefrontGateway(cache=MemoryTagCache())
        gateway.catalog.get_product = AsyncMock(return_value=Ok(None))

        assert await gateway.get_product("shirt") == Ok(None)
        gateway.catalog.get_product.assert_awaited_once_with("shirt")
