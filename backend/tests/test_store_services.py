"""
Glee Threads Backend — Blob, Content & Dashboard Service Unit Tests
=====================================================================

What:  Upload storage (both backends), content pages and dashboard figures.
How:   The local backend writes into pytest's tmp_path; the Vercel backend
       talks to an httpx.MockTransport, so no network is used.

What we test:
    ✅ Filename sanitising and blob URL detection
    ✅ Upload limits, local writes, Vercel PUT headers, missing token
    ✅ Delete: blob URLs batched, local files removed, foreign URLs skipped
    ✅ Path traversal is refused when serving local files
    ✅ Content pages and fixed settings
    ✅ Dashboard month window and zero fallback for order figures
"""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from app.config import settings
from app.exceptions import BlobStorageError, NotFoundError, StorefrontError, ValidationError
from app.services.blob_service import BlobStorageService, is_blob_url, safe_filename
from app.services.content_service import ContentService
from app.services.dashboard_service import DashboardService, month_window

BLOB_URL = "https://abc123.public.blob.vercel-storage.com/images/front-Xy12.png"


def _mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ══════════════════════════════════════════════════════════════════════════
# Blob storage
# ══════════════════════════════════════════════════════════════════════════

class TestBlobHelpers:

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("design.png", "design.png"),
            ("../../etc/passwd", "passwd"),
            ("my design (1).PNG", "my-design-1-.PNG"),
        ],
    )
    def test_safe_filename(self, filename, expected):
        assert safe_filename(filename) == expected

    def test_safe_filename_default(self):
        name = safe_filename(None)
        assert name.startswith("upload-") and name.endswith(".png")

    def test_is_blob_url(self):
        assert is_blob_url(BLOB_URL) is True
        assert is_blob_url("https://example.com/a.png") is False
        assert is_blob_url(None) is False


class TestBlobUpload:

    @pytest.mark.asyncio
    async def test_empty_body(self, tmp_path):
        service = BlobStorageService(storage_root=str(tmp_path))
        with pytest.raises(ValidationError) as exc_info:
            await service.upload(b"", "a.png")
        assert exc_info.value.message == "File body missing"

    @pytest.mark.asyncio
    async def test_too_large(self, tmp_path):
        service = BlobStorageService(storage_root=str(tmp_path))
        with patch.object(settings, "max_upload_size", 1024):
            with pytest.raises(ValidationError) as exc_info:
                await service.upload(b"x" * 1025, "a.png")
        assert "maximum upload size" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_local_backend_writes_file(self, tmp_path):
        service = BlobStorageService(storage_root=str(tmp_path))
        with patch.object(settings, "storage_backend", "local"):
            result = await service.upload(b"png-bytes", "front design.png", "image/png")

        assert result.url.startswith("/api/files/images/front-design-")
        assert result.url.endswith(".png")
        assert result.contentType == "image/png"
        assert (tmp_path / result.pathname).read_bytes() == b"png-bytes"

    @pytest.mark.asyncio
    async def test_vercel_backend_requires_token(self, tmp_path):
        service = BlobStorageService(storage_root=str(tmp_path))
        with patch.object(settings, "storage_backend", "vercel"), \
             patch.object(settings, "blob_read_write_token", ""):
            with pytest.raises(StorefrontError) as exc_info:
                await service.upload(b"data", "a.png")
        assert exc_info.value.message == "Server configuration error: Missing Blob Token"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_vercel_backend_puts_blob(self, tmp_path):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("authorization")
            seen["suffix"] = request.headers.get("x-add-random-suffix")
            return httpx.Response(
                200,
                json={
                    "url": BLOB_URL,
                    "downloadUrl": BLOB_URL + "?download=1",
                    "pathname": "images/front-Xy12.png",
                    "contentType": "image/png",
                    "contentDisposition": 'inline; filename="front-Xy12.png"',
                },
            )

        service = BlobStorageService(storage_root=str(tmp_path))
        service._client = _mock_client(handler)
        with patch.object(settings, "storage_backend", "vercel"), \
             patch.object(settings, "blob_read_write_token", "vercel_blob_rw_test"):
            result = await service.upload(b"data", "front.png", "image/png")
        await service.close()

        assert result.url == BLOB_URL
        assert seen == {
            "method": "PUT",
            "path": "/images/front.png",
            "auth": "Bearer vercel_blob_rw_test",
            "suffix": "1",
        }

    @pytest.mark.asyncio
    async def test_vercel_rejection_becomes_upload_failed(self, tmp_path):
        service = BlobStorageService(storage_root=str(tmp_path))
        service._client = _mock_client(lambda request: httpx.Response(403, text="forbidden"))
        with patch.object(settings, "storage_backend", "vercel"), \
             patch.object(settings, "blob_read_write_token", "vercel_blob_rw_test"):
            with pytest.raises(BlobStorageError) as exc_info:
                await service.upload(b"data", "front.png")
        await service.close()

        assert exc_info.value.message == "Upload failed"
        assert exc_info.value.details == "Blob storage returned 403"


class TestBlobDelete:

    @pytest.mark.asyncio
    async def test_blob_urls_deleted_in_one_call(self, tmp_path):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={})

        service = BlobStorageService(storage_root=str(tmp_path))
        service._client = _mock_client(handler)
        with patch.object(settings, "blob_read_write_token", "vercel_blob_rw_test"):
            deleted = await service.delete([BLOB_URL, None, "https://example.com/x.png"])
        await service.close()

        assert deleted == [BLOB_URL]
        assert bodies == [{"urls": [BLOB_URL]}]

    @pytest.mark.asyncio
    async def test_blob_delete_failure(self, tmp_path):
        service = BlobStorageService(storage_root=str(tmp_path))
        service._client = _mock_client(lambda request: httpx.Response(500))
        with patch.object(settings, "blob_read_write_token", "vercel_blob_rw_test"):
            with pytest.raises(BlobStorageError):
                await service.delete([BLOB_URL])
        await service.close()

    @pytest.mark.asyncio
    async def test_local_file_removed(self, tmp_path):
        stored = tmp_path / "images" / "a.png"
        stored.parent.mkdir()
        stored.write_bytes(b"x")
        service = BlobStorageService(storage_root=str(tmp_path))

        deleted = await service.delete(["/api/files/images/a.png", "/api/files/images/missing.png"])

        assert not stored.exists()
        assert deleted == ["/api/files/images/a.png", "/api/files/images/missing.png"]

    def test_resolve_local_refuses_traversal(self, tmp_path):
        service = BlobStorageService(storage_root=str(tmp_path))
        assert service.resolve_local("../outside.txt") is None
        assert service.resolve_local("images/a.png") == (tmp_path / "images" / "a.png").resolve()


# ══════════════════════════════════════════════════════════════════════════
# Content
# ══════════════════════════════════════════════════════════════════════════

class TestContentService:

    def setup_method(self):
        self.service = ContentService()

    def test_settings(self):
        site = self.service.get_settings()
        assert site.free_shipping_threshold == 999
        assert site.shipping_fee == 99
        assert site.gst_enabled is True

    def test_pages(self):
        slugs = [page.slug for page in self.service.list_pages()]
        assert {"about", "contact", "faqs", "size-guide"} <= set(slugs)

        faqs = self.service.get_page("faqs")
        assert faqs.title
        assert faqs.sections

    def test_about_sections_have_copy(self):
        about = self.service.get_page("about")
        for section in about.sections:
            assert section.get("body") or section.get("items"), section["heading"]

    def test_unknown_page(self):
        with pytest.raises(NotFoundError) as exc_info:
            self.service.get_page("careers")
        assert exc_info.value.message == "Page not found"


# ══════════════════════════════════════════════════════════════════════════
# Dashboard
# ══════════════════════════════════════════════════════════════════════════

class TestMonthWindow:

    def test_six_months_oldest_first(self):
        starts = month_window(datetime(2025, 3, 18))
        assert [d.strftime("%Y-%m") for d in starts] == [
            "2024-10", "2024-11", "2024-12", "2025-01", "2025-02", "2025-03",
        ]
        assert all(d.day == 1 for d in starts)

    def test_custom_length(self):
        assert len(month_window(datetime(2025, 1, 31), months=12)) == 12


class TestDashboardService:

    def setup_method(self):
        self.service = DashboardService()

    @staticmethod
    def _count(value):
        result = MagicMock()
        result.scalar.return_value = value
        return result

    @staticmethod
    def _rows(rows):
        result = MagicMock()
        result.all.return_value = rows
        return result

    @pytest.mark.asyncio
    async def test_order_figures_degrade_to_zero(self, mock_db_session):
        down = OperationalError("SELECT", {}, Exception("no such table: orders"))
        mock_db_session.execute.side_effect = [
            self._count(12),                                   # products
            self._count(3),                                    # categories
            self._rows([(1, "Tee", 499, None, "Basics")]),     # recent products
            self._rows([(1, "Basics", 12)]),                   # top categories
            down,                                              # orders
            self._count(40),                                   # subscribers
        ]

        dashboard = await self.service.build(mock_db_session)

        assert dashboard.totalProducts == 12
        assert dashboard.totalCategories == 3
        assert dashboard.totalOrders == 0
        assert dashboard.totalRevenue == 0.0
        assert dashboard.monthlyStats == []
        assert dashboard.totalSubscribers == 40
        assert dashboard.recentProducts[0].category_name == "Basics"
        assert dashboard.recentOrders == []

    @pytest.mark.asyncio
    async def test_monthly_stats_fill_empty_months(self, mock_db_session):
        now = datetime.now(timezone.utc)
        mock_db_session.execute.side_effect = [
            self._count(0),
            self._count(0),
            self._rows([]),
            self._rows([]),
            self._count(5),                                    # total orders
            self._count(2),                                    # pending
            self._count(3),                                    # paid
            self._count(1500),                                 # revenue
            self._rows([(now, 1000), (now, 500)]),             # monthly rows
            self._count(0),                                    # subscribers
        ]

        dashboard = await self.service.build(mock_db_session)

        assert dashboard.totalOrders == 5
        assert dashboard.pendingOrders == 2
        assert dashboard.totalUsers == 3
        assert dashboard.totalRevenue == 1500.0
        assert len(dashboard.monthlyStats) == 6
        current = dashboard.monthlyStats[-1]
        assert current.month == now.strftime("%b")
        assert (current.orders, current.revenue) == (2, 1500.0)
        assert all(stat.orders == 0 for stat in dashboard.monthlyStats[:-1])
