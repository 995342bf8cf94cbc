import logging
from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_catalog
from app.schemas.products import ProductOut
from app.services.catalog import ProductCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(catalog: ProductCatalog = Depends(get_catalog)):
    products = catalog.list_products()
    logger.info(f"Returning {len(products)} products")
    return products


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, catalog: ProductCatalog = Depends(get_catalog)):
    return catalog.get_product(product_id)
