"""API routers for the REST API."""

from parametrics.web.routers.kitchen import router as kitchen_router
from parametrics.web.routers.placement import router as placement_router
from parametrics.web.routers.pricing import router as pricing_router

__all__ = [
    "kitchen_router",
    "placement_router",
    "pricing_router",
]
