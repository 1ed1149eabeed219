"""
Glee Threads Backend — Admin Route Tests
==========================================

What:  The admin gate, login/verify, and the HTTP mapping of admin endpoints.
How:   Tokens come from conftest (signed with the test JWT_SECRET); services
       are patched in the route modules so these tests stay about HTTP.

What we test:
    ✅ Every /api/admin route answers a flat 401 without a valid admin token
    ✅ /verify distinguishes missing, invalid and non-admin tokens
    ✅ Status codes and messages of the CRUD endpoints
    ✅ Settings are read-only
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.exceptions import NotFoundError, ValidationError


class TestAdminGate:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/admin/dashboard"),
            ("GET", "/api/admin/categories"),
            ("POST", "/api/admin/products"),
            ("GET", "/api/admin/coupons"),
            ("GET", "/api/admin/custom-orders"),
            ("DELETE", "/api/admin/custom-orders?id=1"),
            ("PUT", "/api/admin/featured-products/1/position"),
            ("GET", "/api/admin/subscribers"),
        ],
    )
    async def test_requires_token(self, test_client, method, path):
        response = await test_client.request(method, path)
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_rejects_non_admin_token(self, test_client, user_token):
        response = await test_client.get(
            "/api/admin/subscribers", headers={"Authorization": f"Bearer {user_token}"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_rejects_forged_token(self, test_client):
        response = await test_client.get(
            "/api/admin/subscribers", headers={"Authorization": "Bearer abc.def.ghi"}
        )
        assert response.status_code == 401


class TestAdminAuthRoutes:

    @pytest.mark.asyncio
    async def test_verify_without_token(self, test_client):
        response = await test_client.get("/api/admin/auth/verify")
        assert response.status_code == 401
        assert response.json() == {"valid": False, "error": "No token provided"}

    @pytest.mark.asyncio
    async def test_verify_invalid_token(self, test_client):
        response = await test_client.get(
            "/api/admin/auth/verify", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
        assert response.json() == {"valid": False, "error": "Invalid token"}

    @pytest.mark.asyncio
    async def test_verify_non_admin(self, test_client, user_token):
        response = await test_client.get(
            "/api/admin/auth/verify", headers={"Authorization": f"Bearer {user_token}"}
        )
        assert response.status_code == 403
        assert response.json() == {"valid": False, "error": "Not authorized"}

    @pytest.mark.asyncio
    async def test_verify_admin(self, test_client, admin_headers):
        response = await test_client.get("/api/admin/auth/verify", headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["user"]["role"] == "admin"

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, test_client):
        response = await test_client.post("/api/admin/auth/login", json={"email": "a@b.c"})
        assert response.status_code == 400
        assert response.json() == {"error": "Email and password are required"}

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, test_client, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result
        response = await test_client.post(
            "/api/admin/auth/login", json={"email": "x@y.z", "password": "secret123"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}


class TestAdminCatalogueRoutes:

    @pytest.mark.asyncio
    async def test_create_category(self, test_client, admin_headers):
        with patch("app.routes.admin_catalog.category_service") as mock_categories:
            mock_categories.create = AsyncMock(return_value=7)
            response = await test_client.post(
                "/api/admin/categories", json={"name": "Oversized"}, headers=admin_headers
            )
        assert response.status_code == 201
        assert response.json() == {"message": "Category created successfully", "categoryId": 7}

    @pytest.mark.asyncio
    async def test_delete_non_empty_category(self, test_client, admin_headers):
        with patch("app.routes.admin_catalog.category_service") as mock_categories:
            mock_categories.delete = AsyncMock(
                side_effect=ValidationError("Cannot delete category with products. Move or delete products first.")
            )
            response = await test_client.delete("/api/admin/categories/1", headers=admin_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_product(self, test_client, admin_headers):
        with patch("app.routes.admin_catalog.product_service") as mock_products:
            mock_products.create = AsyncMock(return_value=11)
            response = await test_client.post(
                "/api/admin/products",
                json={"name": "Tee", "price": 499, "category_id": 1, "sizes": [{"size": "M", "quantity": 3}]},
                headers=admin_headers,
            )
        assert response.status_code == 201
        assert response.json() == {"message": "Product created successfully", "productId": 11}

    @pytest.mark.asyncio
    async def test_toggle_featured(self, test_client, admin_headers):
        with patch("app.routes.admin_catalog.featured_service") as mock_featured:
            mock_featured.set_pinned = AsyncMock()
            response = await test_client.put(
                "/api/admin/products/5/featured", json={"is_featured": True}, headers=admin_headers
            )
        assert response.status_code == 200
        assert response.json()["message"] == "Product added to featured"
        mock_featured.set_pinned.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_toggle_hero_off(self, test_client, admin_headers):
        with patch("app.routes.admin_catalog.hero_service") as mock_hero:
            mock_hero.set_pinned = AsyncMock()
            response = await test_client.put(
                "/api/admin/products/5/hero", json={"is_hero": False}, headers=admin_headers
            )
        assert response.json()["message"] == "Product removed from hero section"

    @pytest.mark.asyncio
    async def test_stock_toggle(self, test_client, admin_headers):
        with patch("app.routes.admin_catalog.product_service") as mock_products:
            mock_products.set_out_of_stock = AsyncMock()
            response = await test_client.put(
                "/api/admin/products/5/stock", json={"is_out_of_stock": True}, headers=admin_headers
            )
        assert response.status_code == 200
        assert response.json() == {"message": "Stock status updated", "is_out_of_stock": True}

    @pytest.mark.asyncio
    async def test_move_featured(self, test_client, admin_headers):
        with patch("app.routes.admin_showcase.featured_service") as mock_featured:
            mock_featured.move = AsyncMock(return_value="Already at the top")
            response = await test_client.put(
                "/api/admin/featured-products/5/position", json={"direction": "up"}, headers=admin_headers
            )
        assert response.status_code == 200
        assert response.json() == {"message": "Already at the top"}


class TestAdminCommerceRoutes:

    @pytest.mark.asyncio
    async def test_create_coupon(self, test_client, admin_headers):
        with patch("app.routes.admin_commerce.coupon_service") as mock_coupons:
            mock_coupons.create = AsyncMock(return_value=3)
            response = await test_client.post(
                "/api/admin/coupons",
                json={"code": "fest20", "discount_percent": 20, "expiry_date": "2030-12-31"},
                headers=admin_headers,
            )
        assert response.status_code == 201
        assert response.json() == {"message": "Coupon created successfully", "couponId": 3}

    @pytest.mark.asyncio
    async def test_delete_coupon(self, test_client, admin_headers):
        with patch("app.routes.admin_commerce.coupon_service") as mock_coupons:
            mock_coupons.delete = AsyncMock()
            response = await test_client.delete("/api/admin/coupons/3", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Coupon deleted successfully"}
        assert mock_coupons.delete.await_args[0][1] == 3

    @pytest.mark.asyncio
    async def test_delete_unknown_coupon(self, test_client, admin_headers):
        with patch("app.routes.admin_commerce.coupon_service") as mock_coupons:
            mock_coupons.delete = AsyncMock(side_effect=NotFoundError("Coupon not found"))
            response = await test_client.delete("/api/admin/coupons/99", headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Coupon not found"}

    @pytest.mark.asyncio
    async def test_update_order_status(self, test_client, admin_headers):
        with patch("app.routes.admin_commerce.order_service") as mock_orders:
            mock_orders.update_status = AsyncMock(return_value="paid")
            response = await test_client.put(
                "/api/admin/orders/9", json={"status": "PAID"}, headers=admin_headers
            )
        assert response.status_code == 200
        assert response.json() == {"message": "Order status updated successfully"}
        mock_orders.update_status.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_missing_order(self, test_client, admin_headers):
        with patch("app.routes.admin_commerce.order_service") as mock_orders:
            mock_orders.update_status = AsyncMock(side_effect=NotFoundError("Order not found"))
            response = await test_client.put(
                "/api/admin/orders/9", json={"status": "paid"}, headers=admin_headers
            )
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    @pytest.mark.asyncio
    async def test_delete_custom_order_by_query_id(self, test_client, admin_headers):
        with patch("app.routes.admin_commerce.custom_order_service") as mock_custom:
            mock_custom.delete = AsyncMock()
            response = await test_client.delete("/api/admin/custom-orders?id=12", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert mock_custom.delete.await_args[0][1] == 12

    @pytest.mark.asyncio
    async def test_delete_custom_order_without_id(self, test_client, admin_headers):
        response = await test_client.delete("/api/admin/custom-orders", headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Order ID is required"}


class TestAdminStoreRoutes:

    @pytest.mark.asyncio
    async def test_settings_read(self, test_client, admin_headers):
        response = await test_client.get("/api/admin/settings", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["settings"]["gst_percentage"] == 18

    @pytest.mark.asyncio
    async def test_settings_read_only(self, test_client, admin_headers):
        response = await test_client.put(
            "/api/admin/settings", json={"shipping_fee": 0}, headers=admin_headers
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Store settings are read-only"}
