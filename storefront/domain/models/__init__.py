"""
Domain models for storefront entities.

These models are the normalized shapes handed to rendering; they are
immutable and built fresh for every request.
"""

from .cart import Cart, CartCost, CartLine, CartLineCost, CartMerchandise, CartProduct
from .collection import Collection
from .menu import Menu
from .product import SEO, PriceRange, Product, ProductOption, ProductVariant, SelectedOption

__all__ = [
    "Cart",
    "CartCost",
    "CartLine",
    "CartLineCost",
    "CartMerchandise",
    "CartProduct",
    "Collection",
    "Menu",
    "PriceRange",
    "Product",
    "ProductOption",
    "ProductVariant",
    "SEO",
    "SelectedOption",
]
