"""
Cart query and mutations for the Storefront API.

Every mutation returns the full cart so the caller gets the updated state
in the same round trip.
"""

from .fragments import CART_FRAGMENT

# =============================================
# CART QUERIES
# =============================================

GET_CART_QUERY = (
    """
query getCart($cartId: ID!) {
  cart(id: $cartId) {
    ...cart
  }
}
"""
    + CART_FRAGMENT
)

# =============================================
# CART MUTATIONS
# =============================================

CREATE_CART_MUTATION = (
    """
mutation createCart($lineItems: [CartLineInput!]) {
  cartCreate(input: { lines: $lineItems }) {
    cart {
      ...cart
    }
  }
}
"""
    + CART_FRAGMENT
)

ADD_TO_CART_MUTATION = (
    """
mutation addToCart($cartId: ID!, $lines: [CartLineInput!]!) {
  cartLinesAdd(cartId: $cartId, lines: $lines) {
    cart {
      ...cart
    }
  }
}
"""
    + CART_FRAGMENT
)

REMOVE_FROM_CART_MUTATION = (
    """
mutation removeFromCart($cartId: ID!, $lineIds: [ID!]!) {
  cartLinesRemove(cartId: $cartId, lineIds: $lineIds) {
    cart {
      ...cart
    }
  }
}
"""
    + CART_FRAGMENT
)

UPDATE_CART_MUTATION = (
    """
mutation updateCart($cartId: ID!, $lines: [CartLineUpdateInput!]!) {
  cartLinesUpdate(cartId: $cartId, lines: $lines) {
    cart {
      ...cart
    }
  }
}
"""
    + CART_FRAGMENT
)

__all__ = [
    "GET_CART_QUERY",
    "CREATE_CART_MUTATION",
    "ADD_TO_CART_MUTATION",
    "REMOVE_FROM_CART_MUTATION",
    "UPDATE_CART_MUTATION",
]
