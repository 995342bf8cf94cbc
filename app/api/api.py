from fastapi import APIRouter

from app.api.routers import products as products_router
from app.api.routers import payments as payments_router
from app.api.routers import webhooks as webhooks_router

router = APIRouter()

# storefront routes
router.include_router(products_router.router)

# checkout routes
router.include_router(payments_router.router)

# webhook routes
router.include_router(webhooks_router.router)
