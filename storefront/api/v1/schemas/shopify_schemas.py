"""
Modelos Pydantic para datos de la Shopify Storefront GraphQL API.

Este módulo define los schemas del formato de cable (connections con
edges/node) y un schema de variables y de respuesta por cada operación.
Las respuestas se validan aquí antes de pasar a los reshapers.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator

from storefront.domain.models import SEO, CartLineCost, PriceRange, ProductOption, ProductVariant, SelectedOption
from storefront.domain.value_objects import Money

T = TypeVar("T")


def wrap_flat_list(v):
    """Acepta listas ya aplanadas donde se espera una connection."""
    if isinstance(v, list):
        return {"edges": [{"node": node} for node in v]}
    return v


# Connection Models


class Edge(BaseModel, Generic[T]):
    """Envoltorio de paginación de un nodo."""

    node: Optional[T] = None


class Connection(BaseModel, Generic[T]):
    """Lista paginada en formato edges[].node."""

    edges: List[Optional[Edge[T]]] = Field(default_factory=list)


# Product Models


class ShopifyImage(BaseModel):
    """Imagen tal como la envía Shopify (altText puede faltar)."""

    url: str
    altText: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class ShopifyProduct(BaseModel):
    """Producto de Shopify con imágenes y variantes en formato connection."""

    id: str
    handle: str
    availableForSale: bool = False
    title: str
    description: str = ""
    descriptionHtml: str = ""
    options: List[ProductOption] = Field(default_factory=list)
    priceRange: PriceRange
    variants: Connection[ProductVariant] = Field(default_factory=Connection[ProductVariant])
    featuredImage: Optional[ShopifyImage] = None
    images: Connection[ShopifyImage] = Field(default_factory=Connection[ShopifyImage])
    seo: SEO = Field(default_factory=SEO)
    tags: List[str] = Field(default_factory=list)
    updatedAt: str

    @field_validator("variants", "images", mode="before")
    @classmethod
    def accept_flat_lists(cls, v):
        """Permite re-procesar un producto ya normalizado."""
        return wrap_flat_list(v)

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v):
        """Convierte string de tags a lista."""
        if isinstance(v, str):
            return [tag.strip() for tag in v.split(",") if tag.strip()]
        return v or []


# Collection Models


class ShopifyCollection(BaseModel):
    """Colección de Shopify."""

    handle: str
    title: str
    description: str = ""
    seo: SEO = Field(default_factory=SEO)
    updatedAt: str


# Cart Models


class ShopifyCartProduct(BaseModel):
    id: str
    handle: str
    title: str
    featuredImage: Optional[ShopifyImage] = None


class ShopifyCartMerchandise(BaseModel):
    id: str
    title: str
    selectedOptions: List[SelectedOption] = Field(default_factory=list)
    product: ShopifyCartProduct


class ShopifyCartLine(BaseModel):
    id: str
    quantity: int
    cost: CartLineCost
    merchandise: ShopifyCartMerchandise


class ShopifyCartCost(BaseModel):
    """Totales del carrito; totalTaxAmount puede venir vacío."""

    subtotalAmount: Money
    totalAmount: Money
    totalTaxAmount: Optional[Money] = None


class ShopifyCart(BaseModel):
    """Carrito de Shopify con líneas en formato connection."""

    id: str
    checkoutUrl: str
    cost: ShopifyCartCost
    lines: Connection[ShopifyCartLine] = Field(default_factory=Connection[ShopifyCartLine])
    totalQuantity: int = 0

    @field_validator("lines", mode="before")
    @classmethod
    def accept_flat_lists(cls, v):
        return wrap_flat_list(v)


# Menu Models


class ShopifyMenuItem(BaseModel):
    """Item del menú; los encabezados pueden no tener url."""

    title: str
    url: Optional[str] = None


class ShopifyMenu(BaseModel):
    items: List[Optional[ShopifyMenuItem]] = Field(default_factory=list)


# Operation Variables


class NoVariables(BaseModel):
    """Operaciones sin variables."""


class MenuVariables(BaseModel):
    handle: str = Field(min_length=1)


class ProductsVariables(BaseModel):
    query: Optional[str] = None
    reverse: Optional[bool] = None
    sortKey: Optional[str] = None


class CollectionVariables(BaseModel):
    handle: str = Field(min_length=1)


class CollectionProductsVariables(BaseModel):
    handle: str = Field(min_length=1)
    reverse: Optional[bool] = None
    sortKey: Optional[str] = None


class ProductVariables(BaseModel):
    handle: str = Field(min_length=1)


class ProductRecommendationsVariables(BaseModel):
    productId: str = Field(min_length=1)


class CartVariables(BaseModel):
    cartId: str = Field(min_length=1)


class CartLineInput(BaseModel):
    """Línea a agregar al carrito."""

    merchandiseId: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class CartLineUpdateInput(BaseModel):
    """Línea existente a actualizar."""

    id: str = Field(min_length=1)
    merchandiseId: str = Field(min_length=1)
    quantity: int = Field(ge=0)


class CreateCartVariables(BaseModel):
    lineItems: Optional[List[CartLineInput]] = None


class AddToCartVariables(BaseModel):
    cartId: str = Field(min_length=1)
    lines: List[CartLineInput] = Field(min_length=1)


class RemoveFromCartVariables(BaseModel):
    cartId: str = Field(min_length=1)
    lineIds: List[str] = Field(min_length=1)


class UpdateCartVariables(BaseModel):
    cartId: str = Field(min_length=1)
    lines: List[CartLineUpdateInput] = Field(min_length=1)


# Operation Responses (contenido de "data")


class MenuOperationData(BaseModel):
    menu: Optional[ShopifyMenu] = None


class ProductsOperationData(BaseModel):
    products: Connection[ShopifyProduct]


class CollectionsOperationData(BaseModel):
    collections: Connection[ShopifyCollection]


class CollectionOperationData(BaseModel):
    collection: Optional[ShopifyCollection] = None


class CollectionWithProducts(BaseModel):
    products: Connection[ShopifyProduct]


class CollectionProductsOperationData(BaseModel):
    collection: Optional[CollectionWithProducts] = None


class ProductOperationData(BaseModel):
    product: Optional[ShopifyProduct] = None


class ProductRecommendationsOperationData(BaseModel):
    productRecommendations: Optional[List[Optional[ShopifyProduct]]] = None


class CartOperationData(BaseModel):
    cart: Optional[ShopifyCart] = None


class CartPayload(BaseModel):
    cart: ShopifyCart


class CreateCartOperationData(BaseModel):
    cartCreate: CartPayload


class AddToCartOperationData(BaseModel):
    cartLinesAdd: CartPayload


class RemoveFromCartOperationData(BaseModel):
    cartLinesRemove: CartPayload


class UpdateCartOperationData(BaseModel):
    cartLinesUpdate: CartPayload


# Webhook Models


class RevalidationResponse(BaseModel):
    """Respuesta del endpoint de revalidación."""

    status: int = 200
    revalidated: bool
    tags: List[str] = Field(default_factory=list)
    now: int
