"""
Product domain model (normalized).

Represents a product as consumed by rendering: images and variants are
plain ordered lists instead of backend connections.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.value_objects import Image, Money


class SEO(BaseModel):
    """Search engine metadata."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    description: Optional[str] = None


class ProductOption(BaseModel):
    """Product option (e.g. Size, Color) with its values."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    values: List[str] = Field(default_factory=list)


class SelectedOption(BaseModel):
    """Option chosen by a variant."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class ProductVariant(BaseModel):
    """Purchasable variant of a product."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    availableForSale: bool = False
    selectedOptions: List[SelectedOption] = Field(default_factory=list)
    price: Money


class PriceRange(BaseModel):
    """Minimum and maximum variant prices."""

    model_config = ConfigDict(frozen=True)

    maxVariantPrice: Money
    minVariantPrice: Money


class Product(BaseModel):
    """
    Normalized product.

    Attributes:
        handle: URL-safe slug used by product pages
        variants: Flattened variants in backend order
        images: Flattened images, every one with a non-empty altText
        tags: Descriptive backend tags (not cache tags)
    """

    model_config = ConfigDict(frozen=True)

    id: str
    handle: str
    availableForSale: bool = False
    title: str
    description: str = ""
    descriptionHtml: str = ""
    options: List[ProductOption] = Field(default_factory=list)
    priceRange: PriceRange
    variants: List[ProductVariant] = Field(default_factory=list)
    featuredImage: Optional[Image] = None
    images: List[Image] = Field(default_factory=list)
    seo: SEO = Field(default_factory=SEO)
    tags: List[str] = Field(default_factory=list)
    updatedAt: str
