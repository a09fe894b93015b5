"""Tests unitarios para la normalización de payloads de la Storefront API."""

import copy

from conftest import cart_payload, collection_payload, connection, product_payload

from storefront.api.v1.schemas.shopify_schemas import Connection, ShopifyImage
from storefront.domain.models import Product
from storefront.services.reshapers import (
    flatten,
    image_filename,
    reshape_cart,
    reshape_collection,
    reshape_collections,
    reshape_images,
    reshape_menu,
    reshape_product,
    reshape_products,
)

HIDDEN_TAG = "nextjs-frontend-hidden"


class TestFlatten:
    """Tests para el aplanado de connections."""

    def test_flatten_raw_mapping_preserves_order(self):
        """Debe devolver los nodos en el orden del backend."""
        assert flatten(connection(["a", "b", "c"])) == ["a", "b", "c"]

    def test_flatten_drops_null_edges_and_nodes(self):
        """Debe descartar edges nulos y nodos nulos."""
        raw = {"edges": [{"node": "a"}, None, {"node": None}, {"node": "b"}]}
        assert flatten(raw) == ["a", "b"]

    def test_flatten_typed_connection(self):
        """Debe aceptar una Connection ya validada."""
        raw = connection([{"url": "https://x/a.jpg"}, {"url": "https://x/b.jpg"}])
        typed = Connection[ShopifyImage].model_validate(raw)
        assert [image.url for image in flatten(typed)] == ["https://x/a.jpg", "https://x/b.jpg"]

    def test_flatten_none_and_empty(self):
        """Debe devolver lista vacía para None o sin edges."""
        assert flatten(None) == []
        assert flatten({"edges": []}) == []
        assert flatten({}) == []

    def test_flatten_already_flat_list(self):
        """Debe aceptar listas ya aplanadas."""
        assert flatten(["a", None, "b"]) == ["a", "b"]


class TestReshapeImages:
    """Tests para el texto alternativo de imágenes."""

    def test_image_filename_strips_extension_and_query(self):
        assert image_filename("https://cdn.shopify.com/s/files/1/products/front.jpg?v=1") == "front"
        assert image_filename("https://cdn.shopify.com/files/no-extension") == "no-extension"

    def test_missing_alt_text_uses_owner_title_and_filename(self):
        """Debe completar altText como '{título} - {archivo}'."""
        images = reshape_images(connection([{"url": "https://cdn.shopify.com/products/front.jpg"}]), "Classic Shirt")
        assert images[0].altText == "Classic Shirt - front"

    def test_existing_alt_text_is_kept(self):
        """Debe respetar el altText enviado por el backend."""
        images = reshape_images(connection([{"url": "https://x/back.png", "altText": "Back view"}]), "Shirt")
        assert images[0].altText == "Back view"


class TestReshapeProduct:
    """Tests para la normalización de productos."""

    def test_flattens_images_and_variants(self):
        """Debe aplanar imágenes y variantes preservando el orden."""
        product = reshape_product(product_payload(), hidden_tag=HIDDEN_TAG)

        assert isinstance(product, Product)
        assert [variant.title for variant in product.variants] == ["S", "M"]
        assert [image.altText for image in product.images] == ["Classic Shirt - front", "Back view"]
        assert product.featuredImage.altText == "Classic Shirt - front"
        assert product.priceRange.minVariantPrice.amount == "10.0"

    def test_hidden_product_is_filtered(self):
        """Debe devolver None para productos con el tag oculto."""
        assert reshape_product(product_payload(tags=[HIDDEN_TAG]), hidden_tag=HIDDEN_TAG) is None

    def test_hidden_product_is_kept_without_filtering(self):
        """Debe devolver el producto oculto cuando no se filtra."""
        product = reshape_product(product_payload(tags=[HIDDEN_TAG]), filter_hidden=False, hidden_tag=HIDDEN_TAG)
        assert product is not None
        assert HIDDEN_TAG in product.tags

    def test_absent_product_is_none(self):
        assert reshape_product(None) is None

    def test_reshaping_is_idempotent(self):
        """Debe producir el mismo producto al re-procesar uno ya normalizado."""
        once = reshape_product(product_payload(), hidden_tag=HIDDEN_TAG)
        twice = reshape_product(once, hidden_tag=HIDDEN_TAG)
        assert twice == once

    def test_input_is_not_mutated(self):
        raw = product_payload()
        snapshot = copy.deepcopy(raw)
        reshape_product(raw, hidden_tag=HIDDEN_TAG)
        assert raw == snapshot

    def test_reshape_products_filters_hidden_and_none(self):
        """Debe descartar ocultos y ausentes sin alterar el orden."""
        products = [
            product_payload(handle="a"),
            None,
            product_payload(handle="hidden-one", tags=[HIDDEN_TAG]),
            product_payload(handle="b"),
        ]
        assert [p.handle for p in reshape_products(products, hidden_tag=HIDDEN_TAG)] == ["a", "b"]


class TestReshapeCollection:
    """Tests para la normalización de colecciones."""

    def test_collection_gets_search_path(self):
        collection = reshape_collection(collection_payload("shirts", "Shirts"))
        assert collection.path == "/search/shirts"
        assert collection.title == "Shirts"

    def test_reshape_collections_drops_absent(self):
        collections = reshape_collections([collection_payload("a", "A"), None, collection_payload("b", "B")])
        assert [c.handle for c in collections] == ["a", "b"]


class TestReshapeCart:
    """Tests para la normalización del carrito."""

    def test_missing_tax_defaults_to_zero(self):
        """Debe completar totalTaxAmount con 0.0 en la moneda por defecto."""
        cart = reshape_cart(cart_payload(with_tax=False), default_currency="USD")
        assert cart.cost.totalTaxAmount.amount == "0.0"
        assert cart.cost.totalTaxAmount.currencyCode == "USD"

    def test_existing_tax_is_kept(self):
        cart = reshape_cart(cart_payload(with_tax=True))
        assert cart.cost.totalTaxAmount.amount == "2.0"

    def test_lines_are_flattened(self):
        """Debe aplanar las líneas y completar el altText de la imagen."""
        cart = reshape_cart(cart_payload())
        assert len(cart.lines) == 1
        line = cart.lines[0]
        assert line.quantity == 2
        assert line.merchandise.product.handle == "classic-shirt"
        assert line.merchandise.product.featuredImage.altText == "Classic Shirt - front"

    def test_input_is_not_mutated(self):
        raw = cart_payload(with_tax=False)
        snapshot = copy.deepcopy(raw)
        reshape_cart(raw)
        assert raw == snapshot

    def test_absent_cart_is_none(self):
        assert reshape_cart(None) is None


class TestReshapeMenu:
    """Tests para las rutas del menú."""

    def test_rewrites_domain_collections_and_pages(self):
        """Debe quitar el dominio, cambiar /collections por /search y quitar /pages."""
        domain = "https://shop.example.com"
        items = [
            {"title": "Shirts", "url": "https://shop.example.com/collections/shirts"},
            {"title": "About", "url": "https://shop.example.com/pages/about"},
            {"title": "Home", "url": "https://shop.example.com/"},
        ]

        menu = reshape_menu(items, domain)

        assert [(entry.title, entry.path) for entry in menu] == [
            ("Shirts", "/search/shirts"),
            ("About", "/about"),
            ("Home", "/"),
        ]

    def test_items_without_url_are_dropped(self):
        items = [
            {"title": "Header", "url": None},
            None,
            {"title": "About", "url": "https://shop.example.com/pages/about"},
        ]
        menu = reshape_menu(items, "https://shop.example.com")
        assert [(entry.title, entry.path) for entry in menu] == [("About", "/about")]

    def test_empty_menu(self):
        assert reshape_menu([], "https://shop.example.com") == []
