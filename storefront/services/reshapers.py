"""
Normalization of Storefront API payloads into domain models.

Reshapers take the decoded wire schemas (or plain mappings, or already
normalized models) and return fresh immutable domain objects. They never
mutate their input and never fail on well-formed data: absent entities
become ``None`` and filtered listings simply get shorter.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel

from storefront.api.v1.schemas.shopify_schemas import (
    ShopifyCart,
    ShopifyCollection,
    ShopifyImage,
    ShopifyMenuItem,
    ShopifyProduct,
)
from storefront.core.config import get_settings
from storefront.domain.models import (
    Cart,
    CartCost,
    CartLine,
    CartMerchandise,
    CartProduct,
    Collection,
    Menu,
    Product,
)
from storefront.domain.value_objects import Image, Money

logger = logging.getLogger(__name__)


def flatten(connection: Any) -> list:
    """
    Flatten a backend connection into its nodes.

    Accepts a typed Connection, a raw ``{"edges": [...]}`` mapping, an
    already flat list or None. Null edges and null nodes are dropped and
    order is preserved.
    """
    if connection is None:
        return []
    if isinstance(connection, list):
        return [node for node in connection if node is not None]

    if isinstance(connection, Mapping):
        edges = connection.get("edges") or []
    else:
        edges = getattr(connection, "edges", None) or []

    nodes = []
    for edge in edges:
        if edge is None:
            continue
        node = edge.get("node") if isinstance(edge, Mapping) else getattr(edge, "node", None)
        if node is not None:
            nodes.append(node)
    return nodes


def _as_wire(model_cls, value):
    if isinstance(value, model_cls):
        return value
    if isinstance(value, BaseModel):
        value = value.model_dump()
    return model_cls.model_validate(value)


def image_filename(url: str) -> str:
    """Last path segment of an image URL without its extension."""
    segment = urlparse(url).path.rsplit("/", 1)[-1]
    if "." in segment:
        segment = segment.rsplit(".", 1)[0]
    return segment


def reshape_image(image: Any, owner_title: str) -> Optional[Image]:
    """Normalize a single image, filling altText from the owner title."""
    if image is None:
        return None
    wire = _as_wire(ShopifyImage, image)
    alt_text = wire.altText or f"{owner_title} - {image_filename(wire.url)}"
    return Image(url=wire.url, altText=alt_text, width=wire.width, height=wire.height)


def reshape_images(images: Any, owner_title: str) -> List[Image]:
    """Flatten an image connection and give every image a non-empty altText."""
    return [reshape_image(image, owner_title) for image in flatten(images)]


def reshape_product(
    product: Any,
    filter_hidden: bool = True,
    hidden_tag: Optional[str] = None,
) -> Optional[Product]:
    """
    Normalize a product.

    Args:
        product: ShopifyProduct, mapping or already normalized Product
        filter_hidden: Return None for products carrying the hidden tag
        hidden_tag: Tag marking hidden products (defaults to HIDDEN_PRODUCT_TAG)

    Returns:
        Optional[Product]: Normalized product, or None when absent or hidden
    """
    if product is None:
        return None

    wire = _as_wire(ShopifyProduct, product)
    hidden_tag = hidden_tag or get_settings().HIDDEN_PRODUCT_TAG
    if filter_hidden and hidden_tag in wire.tags:
        return None

    return Product(
        **wire.model_dump(exclude={"images", "variants", "featuredImage"}),
        variants=flatten(wire.variants),
        featuredImage=reshape_image(wire.featuredImage, wire.title),
        images=reshape_images(wire.images, wire.title),
    )


def reshape_products(products: Iterable[Any], hidden_tag: Optional[str] = None) -> List[Product]:
    """Normalize a product listing, dropping hidden and absent products."""
    reshaped = []
    for product in products or []:
        normalized = reshape_product(product, filter_hidden=True, hidden_tag=hidden_tag)
        if normalized is not None:
            reshaped.append(normalized)
    return reshaped


def reshape_collection(collection: Any) -> Optional[Collection]:
    """Normalize a collection and attach its storefront route."""
    if collection is None:
        return None
    wire = _as_wire(ShopifyCollection, collection)
    return Collection(**wire.model_dump(), path=f"/search/{wire.handle}")


def reshape_collections(collections: Iterable[Any]) -> List[Collection]:
    reshaped = []
    for collection in collections or []:
        normalized = reshape_collection(collection)
        if normalized is not None:
            reshaped.append(normalized)
    return reshaped


def reshape_cart(cart: Any, default_currency: Optional[str] = None) -> Optional[Cart]:
    """
    Normalize a cart.

    Lines are flattened and a missing totalTaxAmount becomes a zero amount
    in the default currency.
    """
    if cart is None:
        return None

    wire = _as_wire(ShopifyCart, cart)
    currency = default_currency or get_settings().DEFAULT_CURRENCY_CODE
    total_tax = wire.cost.totalTaxAmount or Money.zero(currency)

    lines = []
    for line in flatten(wire.lines):
        merchandise = line.merchandise
        product = merchandise.product
        lines.append(
            CartLine(
                id=line.id,
                quantity=line.quantity,
                cost=line.cost,
                merchandise=CartMerchandise(
                    id=merchandise.id,
                    title=merchandise.title,
                    selectedOptions=merchandise.selectedOptions,
                    product=CartProduct(
                        id=product.id,
                        handle=product.handle,
                        title=product.title,
                        featuredImage=reshape_image(product.featuredImage, product.title),
                    ),
                ),
            )
        )

    return Cart(
        id=wire.id,
        checkoutUrl=wire.checkoutUrl,
        cost=CartCost(
            subtotalAmount=wire.cost.subtotalAmount,
            totalAmount=wire.cost.totalAmount,
            totalTaxAmount=total_tax,
        ),
        lines=lines,
        totalQuantity=wire.totalQuantity,
    )


def menu_path(url: str, domain: str) -> str:
    """Turn a backend menu URL into a storefront route."""
    return url.replace(domain, "", 1).replace("/collections", "/search", 1).replace("/pages", "", 1)


def reshape_menu(items: Iterable[Any], domain: Optional[str] = None) -> List[Menu]:
    """
    Normalize menu items into storefront routes.

    Items without a url (headers, placeholders) are dropped.

    Args:
        items: Menu items with title and url
        domain: Store domain prefix to strip (defaults to the configured one)
    """
    domain = domain or get_settings().store_domain
    menu = []
    for raw in items or []:
        if raw is None:
            continue
        item = _as_wire(ShopifyMenuItem, raw)
        if not item.url:
            logger.debug(f"Skipping menu item without url: {item.title}")
            continue
        menu.append(Menu(title=item.title, path=menu_path(item.url, domain)))
    return menu
