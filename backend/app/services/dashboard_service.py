"""
Glee Threads Backend — Admin Dashboard Service
================================================

What:  Aggregated figures for the admin home page.

The order tables are the newest part of the schema and may lag behind a
fresh deployment's migrations, so order and subscriber aggregates degrade
to zero on a database error instead of failing the whole dashboard. Catalog
counts are core and still raise.

Revenue counts orders in any "money received" state. Only pending/paid/
cancelled are written today; shipped/delivered/processing remain in the
filters so rows imported from the old admin tool are still counted.
"""

import logging
from collections import OrderedDict
from datetime import datetime, timezone
from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError
from app.models.catalog import Category, Product
from app.models.order import Order
from app.models.subscriber import Subscriber
from app.schemas.store import (
    DashboardCategory,
    DashboardProduct,
    DashboardResponse,
    MonthlyStat,
)

logger = logging.getLogger(__name__)

PAID_STATUSES = ("paid", "shipped", "delivered")
OPEN_STATUSES = ("pending", "processing")
STATS_MONTHS = 6
RECENT_PRODUCTS_LIMIT = 4
TOP_CATEGORIES_LIMIT = 5


def month_window(now: datetime, months: int = STATS_MONTHS) -> List[datetime]:
    """First day of each of the last `months` calendar months, oldest first."""
    year, month = now.year, now.month
    starts = []
    for _ in range(months):
        starts.append(datetime(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))


class DashboardService:

    async def build(self, db: AsyncSession) -> DashboardResponse:
        try:
            total_products = (await db.execute(select(func.count(Product.id)))).scalar() or 0
            total_categories = (await db.execute(select(func.count(Category.id)))).scalar() or 0
            recent_products = await self._recent_products(db)
            top_categories = await self._top_categories(db)
        except SQLAlchemyError as e:
            logger.error("Database error building dashboard: %s", str(e))
            raise DatabaseError(context={"operation": "dashboard"}) from e

        order_stats = await self._order_stats(db)
        total_subscribers = await self._subscriber_count(db)

        return DashboardResponse(
            totalProducts=total_products,
            totalCategories=total_categories,
            totalSubscribers=total_subscribers,
            recentProducts=recent_products,
            topCategories=top_categories,
            recentOrders=[],
            **order_stats,
        )

    # ── Catalog ───────────────────────────────────────────────────────────

    async def _recent_products(self, db: AsyncSession) -> List[DashboardProduct]:
        result = await db.execute(
            select(Product.id, Product.name, Product.price, Product.image_url, Category.name)
            .outerjoin(Category, Product.category_id == Category.id)
            .order_by(Product.id.desc())
            .limit(RECENT_PRODUCTS_LIMIT)
        )
        return [
            DashboardProduct(
                id=pid, name=name, price=float(price), image_url=image_url, category_name=category_name
            )
            for pid, name, price, image_url, category_name in result.all()
        ]

    async def _top_categories(self, db: AsyncSession) -> List[DashboardCategory]:
        product_count = func.count(Product.id).label("product_count")
        result = await db.execute(
            select(Category.id, Category.name, product_count)
            .outerjoin(Product, Product.category_id == Category.id)
            .group_by(Category.id, Category.name)
            .order_by(product_count.desc())
            .limit(TOP_CATEGORIES_LIMIT)
        )
        return [
            DashboardCategory(id=cid, name=name, product_count=count)
            for cid, name, count in result.all()
        ]

    # ── Orders / subscribers (degrade to zero) ────────────────────────────

    async def _order_stats(self, db: AsyncSession) -> dict:
        empty = {
            "totalOrders": 0,
            "pendingOrders": 0,
            "totalUsers": 0,
            "totalRevenue": 0.0,
            "monthlyStats": [],
        }
        try:
            total_orders = (
                await db.execute(select(func.count(Order.id)).where(Order.status != "cancelled"))
            ).scalar() or 0
            pending_orders = (
                await db.execute(
                    select(func.count(Order.id)).where(Order.status.in_(OPEN_STATUSES))
                )
            ).scalar() or 0
            paid_orders = (
                await db.execute(
                    select(func.count(Order.id)).where(Order.status.in_(PAID_STATUSES))
                )
            ).scalar() or 0
            revenue = (
                await db.execute(
                    select(func.coalesce(func.sum(Order.total_amount), 0)).where(
                        Order.status.in_(PAID_STATUSES)
                    )
                )
            ).scalar() or 0
            monthly = await self._monthly_stats(db)
        except SQLAlchemyError as e:
            logger.warning("Order statistics unavailable, reporting zeros: %s", str(e))
            return empty

        return {
            "totalOrders": total_orders,
            "pendingOrders": pending_orders,
            "totalUsers": paid_orders,
            "totalRevenue": float(revenue),
            "monthlyStats": monthly,
        }

    async def _monthly_stats(self, db: AsyncSession) -> List[MonthlyStat]:
        """
        Paid orders per calendar month for the last six months.

        Grouping happens here rather than in SQL so the query stays portable
        (DATE_FORMAT is MySQL-only). Months without orders report zeros.
        """
        starts = month_window(datetime.now(timezone.utc))
        buckets = OrderedDict((start.strftime("%Y-%m"), [start, 0, 0.0]) for start in starts)

        result = await db.execute(
            select(Order.created_at, Order.total_amount).where(
                Order.status.in_(PAID_STATUSES),
                Order.created_at >= starts[0],
            )
        )
        for created_at, amount in result.all():
            bucket = buckets.get(created_at.strftime("%Y-%m"))
            if bucket is None:
                continue
            bucket[1] += 1
            bucket[2] += float(amount or 0)

        return [
            MonthlyStat(month=start.strftime("%b"), orders=orders, revenue=round(revenue, 2))
            for start, orders, revenue in buckets.values()
        ]

    async def _subscriber_count(self, db: AsyncSession) -> int:
        try:
            return (await db.execute(select(func.count(Subscriber.id)))).scalar() or 0
        except SQLAlchemyError as e:
            logger.warning("Subscriber count unavailable, reporting zero: %s", str(e))
            return 0


dashboard_service = DashboardService()
