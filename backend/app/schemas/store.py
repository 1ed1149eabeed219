"""
Glee Threads Backend — Store-wide Schemas
===========================================

What:  Site settings, content pages, the admin dashboard and upload results.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SiteSettings(BaseModel):
    site_name: str
    hero_title: str
    hero_subtitle: str
    free_shipping_threshold: int
    shipping_fee: int
    gst_percentage: int
    gst_enabled: bool


class SettingsResponse(BaseModel):
    settings: SiteSettings


class PageSummary(BaseModel):
    slug: str
    title: str


class ContentPage(PageSummary):
    description: str
    sections: List[Dict[str, Any]] = Field(default_factory=list)


class MonthlyStat(BaseModel):
    month: str = Field(description="Abbreviated month name, e.g. Jan")
    orders: int
    revenue: float


class DashboardProduct(BaseModel):
    id: int
    name: str
    price: float
    image_url: Optional[str] = None
    category_name: Optional[str] = None


class DashboardCategory(BaseModel):
    id: int
    name: str
    product_count: int


class DashboardResponse(BaseModel):
    totalProducts: int
    totalCategories: int
    totalUsers: int
    totalOrders: int
    pendingOrders: int
    totalRevenue: float
    totalSubscribers: int
    monthlyStats: List[MonthlyStat]
    recentProducts: List[DashboardProduct]
    topCategories: List[DashboardCategory]
    recentOrders: List[Dict[str, Any]] = Field(default_factory=list)


class UploadResponse(BaseModel):
    """Blob descriptor returned by POST /api/upload."""
    url: str
    downloadUrl: Optional[str] = None
    pathname: str
    contentType: Optional[str] = None
    contentDisposition: Optional[str] = None
