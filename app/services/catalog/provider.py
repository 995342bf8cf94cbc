import logging
from typing import Dict, Iterable, List

from app.core.errors import ProductNotFound
from app.schemas.products import ProductOut

logger = logging.getLogger(__name__)


DEMO_PRODUCTS = (
    ProductOut(
        id=1,
        name="Wireless Headphones",
        description="Premium wireless headphones with noise cancellation",
        price=1.00,
        image="https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400",
    ),
    ProductOut(
        id=2,
        name="Smart Watch",
        description="Feature-rich smartwatch with health tracking",
        price=1.00,
        image="https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400",
    ),
    ProductOut(
        id=3,
        name="Laptop Stand",
        description="Ergonomic aluminum laptop stand",
        price=1.00,
        image="https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?w=400",
    ),
    ProductOut(
        id=4,
        name="Mechanical Keyboard",
        description="RGB mechanical keyboard with blue switches",
        price=1.00,
        image="https://images.unsplash.com/photo-1587829741301-dc798b83add3?w=400",
    ),
)


class ProductCatalog:
    """read-only product lookup, keeps insertion order for listings."""

    def __init__(self, products: Iterable[ProductOut]):
        self._products: Dict[int, ProductOut] = {}
        for product in products:
            if product.id in self._products:
                raise ValueError(f"duplicate product id {product.id}")
            self._products[product.id] = product

    def list_products(self) -> List[ProductOut]:
        return list(self._products.values())

    def get_product(self, product_id: int) -> ProductOut:
        product = self._products.get(product_id)
        if product is None:
            logger.info(f"Product not found: {product_id}")
            raise ProductNotFound()
        return product


_default_catalog = ProductCatalog(DEMO_PRODUCTS)


def get_default_catalog() -> ProductCatalog:
    return _default_catalog
