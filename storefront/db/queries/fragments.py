"""
Reusable GraphQL fragments for the Storefront API.

Documents that spread a fragment append its definition at the end, so every
document is self-contained when sent.
"""

IMAGE_FRAGMENT = """
fragment image on Image {
  url
  altText
  width
  height
}
"""

SEO_FRAGMENT = """
fragment seo on SEO {
  description
  title
}
"""

PRODUCT_FRAGMENT = (
    """
fragment product on Product {
  id
  handle
  availableForSale
  title
  description
  descriptionHtml
  options {
    id
    name
    values
  }
  priceRange {
    maxVariantPrice {
      amount
      currencyCode
    }
    minVariantPrice {
      amount
      currencyCode
    }
  }
  variants(first: 250) {
    edges {
      node {
        id
        title
        availableForSale
        selectedOptions {
          name
          value
        }
        price {
          amount
          currencyCode
        }
      }
    }
  }
  featuredImage {
    ...image
  }
  images(first: 20) {
    edges {
      node {
        ...image
      }
    }
  }
  seo {
    ...seo
  }
  tags
  updatedAt
}
"""
    + IMAGE_FRAGMENT
    + SEO_FRAGMENT
)

COLLECTION_FRAGMENT = (
    """
fragment collection on Collection {
  handle
  title
  description
  seo {
    ...seo
  }
  updatedAt
}
"""
    + SEO_FRAGMENT
)

# Cart lines carry a reduced product (no variants/images connections)
CART_FRAGMENT = (
    """
fragment cart on Cart {
  id
  checkoutUrl
  cost {
    subtotalAmount {
      amount
      currencyCode
    }
    totalAmount {
      amount
      currencyCode
    }
    totalTaxAmount {
      amount
      currencyCode
    }
  }
  lines(first: 100) {
    edges {
      node {
        id
        quantity
        cost {
          totalAmount {
            amount
            currencyCode
          }
        }
        merchandise {
          ... on ProductVariant {
            id
            title
            selectedOptions {
              name
              value
            }
            product {
              id
              handle
              title
              featuredImage {
                ...image
              }
            }
          }
        }
      }
    }
  }
  totalQuantity
}
"""
    + IMAGE_FRAGMENT
)
