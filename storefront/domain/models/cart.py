"""
Cart domain model (normalized).

The cart is identified by an opaque id kept client-side; the gateway never
generates or inspects it beyond non-emptiness.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.value_objects import Image, Money

from .product import SelectedOption


class CartProduct(BaseModel):
    """Product summary attached to a cart line."""

    model_config = ConfigDict(frozen=True)

    id: str
    handle: str
    title: str
    featuredImage: Optional[Image] = None


class CartMerchandise(BaseModel):
    """Variant purchased by a cart line."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    selectedOptions: List[SelectedOption] = Field(default_factory=list)
    product: CartProduct


class CartLineCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    totalAmount: Money


class CartLine(BaseModel):
    """Single line of a cart."""

    model_config = ConfigDict(frozen=True)

    id: str
    quantity: int
    cost: CartLineCost
    merchandise: CartMerchandise


class CartCost(BaseModel):
    """Cart totals; totalTaxAmount is always present once normalized."""

    model_config = ConfigDict(frozen=True)

    subtotalAmount: Money
    totalAmount: Money
    totalTaxAmount: Money


class Cart(BaseModel):
    """Normalized cart with flattened lines."""

    model_config = ConfigDict(frozen=True)

    id: str
    checkoutUrl: str
    cost: CartCost
    lines: List[CartLine] = Field(default_factory=list)
    totalQuantity: int = 0

    def find_line(self, merchandise_id: str) -> Optional[CartLine]:
        """Return the line holding the given variant, if any."""
        for line in self.lines:
            if line.merchandise.id == merchandise_id:
                return line
        return None
