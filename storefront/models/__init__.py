# storefront/models/__init__.py
from storefront.models.user_models import User
from storefront.models.activity_models import ActivityLog
from storefront.models.product_models import Product, Collection, collection_products
from storefront.models.discount_models import Discount
from storefront.models.cart_models import Cart, CartItem
from storefront.models.wishlist_models import Wishlist, WishlistItem
from storefront.models.order_models import Order, OrderItem, OrderStatus
from storefront.models.announcement_models import Announcement
