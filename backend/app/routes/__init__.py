# Routes package init
"""
Glee Threads Backend — API Routes Package
===========================================

What:  HTTP route handlers that accept requests and return responses.
How:   One module per area; each exposes a module-level `router`.

Route Inventory:
    Storefront
    - catalog.py:         GET  /api/categories, /api/products, /api/products/{id}
    - showcase.py:        GET  /api/featured-products, /api/hero-products
    - store.py:           GET  /api/settings, /api/pages, /api/pages/{slug}
    - checkout.py:        POST /api/subscribe, /api/coupons/verify,
                               /api/orders, /api/custom-orders
    - uploads.py:         POST /api/upload, GET /api/files/{path}
    - disabled.py:        /api/auth/register, /api/cart (410 / 405)

    Admin (all behind require_admin except admin_auth)
    - admin_auth.py:      POST /api/admin/auth/login, GET /api/admin/auth/verify
    - admin_catalog.py:   categories, products, featured/hero/stock toggles
    - admin_showcase.py:  featured and hero lists and ordering
    - admin_commerce.py:  coupons, orders, custom orders, subscribers
    - admin_store.py:     dashboard, settings

    Ops
    - health.py:          GET  /health

Design Principle:
    Routes are THIN: extract input, call a service, shape the response.
    Business rules and their error messages live in the services.
"""
