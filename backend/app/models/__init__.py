# Importing every model registers its table on Base.metadata (Alembic relies on this).
from app.models.catalog import Category, Product, ProductColor, ProductInventory  # noqa: F401
from app.models.coupon import Coupon  # noqa: F401
from app.models.order import CustomOrder, Order, OrderItem  # noqa: F401
from app.models.showcase import FeaturedProduct, HeroProduct  # noqa: F401
from app.models.subscriber import Subscriber  # noqa: F401
from app.models.user import User  # noqa: F401
