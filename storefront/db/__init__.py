"""
Módulo de acceso a la Shopify Storefront API.

- queries: Documentos GraphQL
- operations: Catálogo de operaciones (variables, respuesta, tags)
- shopify_clients: Transporte y clientes especializados
"""
