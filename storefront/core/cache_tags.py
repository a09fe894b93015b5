"""
Vocabulario de tags de cache y su relación con los topics de webhooks.

Los tags son etiquetas de invalidación asociadas a lecturas y escrituras
del gateway. No confundir con los tags descriptivos de un producto.
"""

from enum import Enum
from typing import Iterable, List, Optional


class CacheTag(str, Enum):
    """Tags de invalidación soportados (conjunto cerrado)."""

    COLLECTIONS = "collections"
    PRODUCTS = "products"
    CART = "cart"


# Prefijo del topic de webhook -> tag que debe invalidarse
TOPIC_PREFIX_TAGS = {
    "collections": CacheTag.COLLECTIONS,
    "products": CacheTag.PRODUCTS,
    "carts": CacheTag.CART,
}


def tags_for_topic(topic: Optional[str]) -> List[CacheTag]:
    """
    Resuelve los tags afectados por un topic de webhook.

    Args:
        topic: Valor del header X-Shopify-Topic (ej. "products/update")

    Returns:
        List[CacheTag]: Tags a invalidar; vacío si el topic no se reconoce
    """
    if not topic:
        return []

    prefix = topic.strip().lower().split("/", 1)[0]
    tag = TOPIC_PREFIX_TAGS.get(prefix)
    return [tag] if tag else []


def normalize_tags(tags: Iterable) -> List[str]:
    """Convierte tags (enum o string) a strings únicos preservando orden."""
    result: List[str] = []
    for tag in tags:
        value = tag.value if isinstance(tag, CacheTag) else str(tag)
        if value not in result:
            result.append(value)
    return result
