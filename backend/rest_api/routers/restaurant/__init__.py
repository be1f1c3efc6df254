"""
Restaurant operations API: tenants, accounts, menu, orders, tables,
delivery robots and feedback.

Order matters for route matching: the dish image router is included before
the restaurant-scoped dish router.
"""

from fastapi import APIRouter

from .restaurants import router as restaurants_router
from .accounts import admin_router, chef_router, customer_router
from .dishes import image_router as dish_image_router, router as dishes_router
from .orders import router as orders_router
from .tables import router as tables_router
from .robots import router as robots_router
from .feedback import router as feedback_router

router = APIRouter()

router.include_router(restaurants_router)
router.include_router(customer_router)
router.include_router(chef_router)
router.include_router(admin_router)
router.include_router(dish_image_router)
router.include_router(dishes_router)
router.include_router(orders_router)
router.include_router(tables_router)
router.include_router(robots_router)
router.include_router(feedback_router)
