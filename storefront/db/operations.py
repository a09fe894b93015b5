"""
Operation catalog for the Storefront API.

Each operation binds a GraphQL document to the pydantic model that validates
its variables before any network call, the pydantic model that decodes the
``data`` payload, the cache tags its reads are stored under and the tags its
writes invalidate.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Type

from pydantic import BaseModel

from storefront.api.v1.schemas import shopify_schemas as schemas
from storefront.core.cache_tags import CacheTag
from storefront.db import queries


class CacheMode(str, Enum):
    """Whether a call may be served from and stored in the tag cache."""

    CACHEABLE = "cacheable"
    NO_CACHE = "no-cache"


@dataclass(frozen=True)
class StorefrontOperation:
    name: str
    document: str
    variables_model: Type[BaseModel]
    response_model: Type[BaseModel]
    tags: Tuple[CacheTag, ...] = ()
    invalidates: Tuple[CacheTag, ...] = ()

    @property
    def is_mutation(self) -> bool:
        return self.document.lstrip().startswith("mutation")

    @property
    def cache_mode(self) -> CacheMode:
        return CacheMode.NO_CACHE if self.is_mutation else CacheMode.CACHEABLE


GET_MENU = StorefrontOperation(
    name="getMenu",
    document=queries.GET_MENU_QUERY,
    variables_model=schemas.MenuVariables,
    response_model=schemas.MenuOperationData,
    tags=(CacheTag.COLLECTIONS,),
)

GET_PRODUCTS = StorefrontOperation(
    name="getProducts",
    document=queries.GET_PRODUCTS_QUERY,
    variables_model=schemas.ProductsVariables,
    response_model=schemas.ProductsOperationData,
    tags=(CacheTag.PRODUCTS,),
)

GET_COLLECTIONS = StorefrontOperation(
    name="getCollections",
    document=queries.GET_COLLECTIONS_QUERY,
    variables_model=schemas.NoVariables,
    response_model=schemas.CollectionsOperationData,
    tags=(CacheTag.COLLECTIONS,),
)

GET_COLLECTION = StorefrontOperation(
    name="getCollection",
    document=queries.GET_COLLECTION_QUERY,
    variables_model=schemas.CollectionVariables,
    response_model=schemas.CollectionOperationData,
    tags=(CacheTag.COLLECTIONS,),
)

GET_COLLECTION_PRODUCTS = StorefrontOperation(
    name="getCollectionProducts",
    document=queries.GET_COLLECTION_PRODUCTS_QUERY,
    variables_model=schemas.CollectionProductsVariables,
    response_model=schemas.CollectionProductsOperationData,
    tags=(CacheTag.COLLECTIONS, CacheTag.PRODUCTS),
)

GET_PRODUCT = StorefrontOperation(
    name="getProduct",
    document=queries.GET_PRODUCT_QUERY,
    variables_model=schemas.ProductVariables,
    response_model=schemas.ProductOperationData,
    tags=(CacheTag.PRODUCTS,),
)

GET_PRODUCT_RECOMMENDATIONS = StorefrontOperation(
    name="getProductRecommendations",
    document=queries.GET_PRODUCT_RECOMMENDATIONS_QUERY,
    variables_model=schemas.ProductRecommendationsVariables,
    response_model=schemas.ProductRecommendationsOperationData,
    tags=(CacheTag.PRODUCTS,),
)

GET_CART = StorefrontOperation(
    name="getCart",
    document=queries.GET_CART_QUERY,
    variables_model=schemas.CartVariables,
    response_model=schemas.CartOperationData,
    tags=(CacheTag.CART,),
)

CREATE_CART = StorefrontOperation(
    name="createCart",
    document=queries.CREATE_CART_MUTATION,
    variables_model=schemas.CreateCartVariables,
    response_model=schemas.CreateCartOperationData,
)

ADD_TO_CART = StorefrontOperation(
    name="addToCart",
    document=queries.ADD_TO_CART_MUTATION,
    variables_model=schemas.AddToCartVariables,
    response_model=schemas.AddToCartOperationData,
    invalidates=(CacheTag.CART,),
)

REMOVE_FROM_CART = StorefrontOperation(
    name="removeFromCart",
    document=queries.REMOVE_FROM_CART_MUTATION,
    variables_model=schemas.RemoveFromCartVariables,
    response_model=schemas.RemoveFromCartOperationData,
    invalidates=(CacheTag.CART,),
)

UPDATE_CART = StorefrontOperation(
    name="updateCart",
    document=queries.UPDATE_CART_MUTATION,
    variables_model=schemas.UpdateCartVariables,
    response_model=schemas.UpdateCartOperationData,
    invalidates=(CacheTag.CART,),
)

OPERATIONS: Dict[str, StorefrontOperation] = {
    op.name: op
    for op in (
        GET_MENU,
        GET_PRODUCTS,
        GET_COLLECTIONS,
        GET_COLLECTION,
        GET_COLLECTION_PRODUCTS,
        GET_PRODUCT,
        GET_PRODUCT_RECOMMENDATIONS,
        GET_CART,
        CREATE_CART,
        ADD_TO_CART,
        REMOVE_FROM_CART,
        UPDATE_CART,
    )
}
