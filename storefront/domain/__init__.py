"""
Domain layer for the storefront commerce gateway.

This layer contains the normalized entities consumed by rendering,
their value objects and the explicit outcome values of gateway calls.
"""
