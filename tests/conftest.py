"""Fixtures y builders compartidos para los tests."""

from typing import Any, Dict, List, Optional

import pytest

from storefront.core.cache_manager import MemoryTagCache, set_tag_cache


def money(amount: str = "10.0", currency: str = "USD") -> Dict[str, str]:
    return {"amount": amount, "currencyCode": currency}


def connection(nodes: List[Any]) -> Dict[str, Any]:
    return {"edges": [{"node": node} for node in nodes]}


def product_payload(
    handle: str = "classic-shirt",
    title: str = "Classic Shirt",
    tags: Optional[List[str]] = None,
    images: Optional[List[Dict[str, Any]]] = None,
    featured_alt: Optional[str] = None,
) -> Dict[str, Any]:
    """Producto tal como lo devuelve la Storefront API."""
    if images is None:
        images = [
            {"url": "https://cdn.shopify.com/s/files/1/products/front.jpg?v=1", "altText": None, "width": 800, "height": 600},
            {"url": "https://cdn.shopify.com/s/files/1/products/back.png", "altText": "Back view", "width": 800, "height": 600},
        ]
    return {
        "id": f"gid://shopify/Product/{handle}",
        "handle": handle,
        "availableForSale": True,
        "title": title,
        "description": "A shirt",
        "descriptionHtml": "<p>A shirt</p>",
        "options": [{"id": "gid://shopify/ProductOption/1", "name": "Size", "values": ["S", "M"]}],
        "priceRange": {"maxVariantPrice": money("20.0"), "minVariantPrice": money("10.0")},
        "variants": connection(
            [
                {
                    "id": f"gid://shopify/ProductVariant/{handle}-s",
                    "title": "S",
                    "availableForSale": True,
                    "selectedOptions": [{"name": "Size", "value": "S"}],
                    "price": money("10.0"),
                },
                {
                    "id": f"gid://shopify/ProductVariant/{handle}-m",
                    "title": "M",
                    "availableForSale": False,
                    "selectedOptions": [{"name": "Size", "value": "M"}],
                    "price": money("20.0"),
                },
            ]
        ),
        "featuredImage": {
            "url": "https://cdn.shopify.com/s/files/1/products/front.jpg?v=1",
            "altText": featured_alt,
            "width": 800,
            "height": 600,
        },
        "images": connection(images),
        "seo": {"title": title, "description": "A shirt"},
        "tags": tags or [],
        "updatedAt": "2024-10-01T00:00:00Z",
    }


def collection_payload(handle: str = "shirts", title: str = "Shirts") -> Dict[str, Any]:
    return {
        "handle": handle,
        "title": title,
        "description": f"All {title.lower()}",
        "seo": {"title": title, "description": None},
        "updatedAt": "2024-10-01T00:00:00Z",
    }


def cart_payload(cart_id: str = "gid://shopify/Cart/abc", with_tax: bool = True) -> Dict[str, Any]:
    """Carrito tal como lo devuelve la Storefront API."""
    return {
        "id": cart_id,
        "checkoutUrl": "https://shop.example.com/checkout/abc",
        "cost": {
            "subtotalAmount": money("20.0"),
            "totalAmount": money("22.0"),
            "totalTaxAmount": money("2.0") if with_tax else None,
        },
        "lines": connection(
            [
                {
                    "id": "gid://shopify/CartLine/1",
                    "quantity": 2,
                    "cost": {"totalAmount": money("20.0")},
                    "merchandise": {
                        "id": "gid://shopify/ProductVariant/classic-shirt-s",
                        "title": "S",
                        "selectedOptions": [{"name": "Size", "value": "S"}],
                        "product": {
                            "id": "gid://shopify/Product/classic-shirt",
                            "handle": "classic-shirt",
                            "title": "Classic Shirt",
                            "featuredImage": {
                                "url": "https://cdn.shopify.com/s/files/1/products/front.jpg",
                                "altText": None,
                                "width": 800,
                                "height": 600,
                            },
                        },
                    },
                }
            ]
        ),
        "totalQuantity": 2,
    }


@pytest.fixture
def memory_cache():
    """Cache en memoria instalado como cache global durante el test."""
    cache = MemoryTagCache()
    set_tag_cache(cache)
    yield cache
    set_tag_cache(None)
