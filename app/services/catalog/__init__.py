"""
Product catalog package.

Read-only product data for the storefront, injected into the routers
through a dependency rather than kept as module state.
"""

from .provider import ProductCatalog, DEMO_PRODUCTS, get_default_catalog

__all__ = [
    'ProductCatalog',
    'DEMO_PRODUCTS',
    'get_default_catalog',
]
