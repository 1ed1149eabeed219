# Services package init
"""
Glee Threads Backend — Services Layer
=======================================

What:  Business logic between routes (HTTP) and the database.
How:   Each service is a class with a module-level singleton. Methods take
       an AsyncSession, apply the storefront's rules, and either return
       schema objects or raise an app.exceptions error.

Service Inventory:
    - AuthService:          password hashing, admin tokens, login
    - CategoryService:      categories (public list, admin CRUD)
    - ProductService:       products and inventory (public and admin)
    - ShowcaseService:      featured grid / hero carousel pins and ordering
    - CouponService:        coupon verification and admin management
    - SubscriptionService:  WhatsApp subscribers
    - OrderService:         guest checkout and order status
    - CustomOrderService:   custom-design orders
    - BlobStorageService:   image upload/delete (Vercel Blob or local disk)
    - DashboardService:     admin dashboard aggregates
    - ContentService:       store settings and static content pages
"""
