from fastapi import APIRouter
from .auth import router as auth_router
from .users import router as users_router
from .activity import router as activity_router
from .products import router as products_router
from .collections import router as collections_router
from .discounts import router as discounts_router
from .cart import router as cart_router
from .wishlist import router as wishlist_router
from .orders import router as orders_router
from .announcements import router as announcements_router
from .images import router as images_router

router = APIRouter()

router.include_router(auth_router)
router.include_router(users_router)
router.include_router(activity_router)
router.include_router(products_router)
router.include_router(collections_router)
router.include_router(discounts_router)
router.include_router(cart_router)
router.include_router(wishlist_router)
router.include_router(orders_router)
router.include_router(announcements_router)
router.include_router(images_router)
