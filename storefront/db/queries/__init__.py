"""
GraphQL documents for the Shopify Storefront API.

Structure:
- fragments: Shared fragments (image, seo, product, collection, cart)
- products: Product listing, detail and recommendations
- collections: Collection listing, detail and collection products
- menu: Navigation menu
- cart: Cart query and mutations
"""

from .cart import *  # noqa: F403
from .collections import *  # noqa: F403
from .menu import *  # noqa: F403
from .products import *  # noqa: F403

__all__ = [
    # Product queries
    "GET_PRODUCTS_QUERY",  # noqa: F405
    "GET_PRODUCT_QUERY",  # noqa: F405
    "GET_PRODUCT_RECOMMENDATIONS_QUERY",  # noqa: F405
    # Collection queries
    "GET_COLLECTIONS_QUERY",  # noqa: F405
    "GET_COLLECTION_QUERY",  # noqa: F405
    "GET_COLLECTION_PRODUCTS_QUERY",  # noqa: F405
    # Menu
    "GET_MENU_QUERY",  # noqa: F405
    # Cart
    "GET_CART_QUERY",  # noqa: F405
    "CREATE_CART_MUTATION",  # noqa: F405
    "ADD_TO_CART_MUTATION",  # noqa: F405
    "REMOVE_FROM_CART_MUTATION",  # noqa: F405
    "UPDATE_CART_MUTATION",  # noqa: F405
]
