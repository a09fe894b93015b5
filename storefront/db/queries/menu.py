"""
Navigation menu query for the Storefront API.
"""

GET_MENU_QUERY = """
query getMenu($handle: String!) {
  menu(handle: $handle) {
    items {
      title
      url
    }
  }
}
"""

__all__ = ["GET_MENU_QUERY"]
