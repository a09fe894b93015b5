"""
Product queries for the Storefront API.
"""

from .fragments import PRODUCT_FRAGMENT

# Product listing with optional search and sorting
GET_PRODUCTS_QUERY = (
    """
query getProducts($sortKey: ProductSortKeys, $reverse: Boolean, $query: String) {
  products(sortKey: $sortKey, reverse: $reverse, query: $query, first: 100) {
    edges {
      node {
        ...product
      }
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

GET_PRODUCT_QUERY = (
    """
query getProduct($handle: String!) {
  product(handle: $handle) {
    ...product
  }
}
"""
    + PRODUCT_FRAGMENT
)

GET_PRODUCT_RECOMMENDATIONS_QUERY = (
    """
query getProductRecommendations($productId: ID!) {
  productRecommendations(productId: $productId) {
    ...product
  }
}
"""
    + PRODUCT_FRAGMENT
)

__all__ = ["GET_PRODUCTS_QUERY", "GET_PRODUCT_QUERY", "GET_PRODUCT_RECOMMENDATIONS_QUERY"]
