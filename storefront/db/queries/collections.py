"""
Collection queries for the Storefront API.
"""

from .fragments import COLLECTION_FRAGMENT, PRODUCT_FRAGMENT

GET_COLLECTIONS_QUERY = (
    """
query getCollections {
  collections(first: 100, sortKey: TITLE) {
    edges {
      node {
        ...collection
      }
    }
  }
}
"""
    + COLLECTION_FRAGMENT
)

GET_COLLECTION_QUERY = (
    """
query getCollection($handle: String!) {
  collection(handle: $handle) {
    ...collection
  }
}
"""
    + COLLECTION_FRAGMENT
)

GET_COLLECTION_PRODUCTS_QUERY = (
    """
query getCollectionProducts($handle: String!, $sortKey: ProductCollectionSortKeys, $reverse: Boolean) {
  collection(handle: $handle) {
    products(sortKey: $sortKey, reverse: $reverse, first: 100) {
      edges {
        node {
          ...product
        }
      }
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

__all__ = ["GET_COLLECTIONS_QUERY", "GET_COLLECTION_QUERY", "GET_COLLECTION_PRODUCTS_QUERY"]
