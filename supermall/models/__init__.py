"""SQLAlchemy ORM models.

Models represent database tables:
- categories: Shop/product grouping
- shops: Mall directory entries
- products: Items sold by shops
- offers: Time-bounded discounts on products
- banners: Time-bounded landing page promotions
"""

from supermall.models.category import Category
from supermall.models.shop import Shop
from supermall.models.product import Product
from supermall.models.offer import Offer
from supermall.models.banner import Banner

__all__ = ["Category", "Shop", "Product", "Offer", "Banner"]
