"""
Glee Threads Backend — Store Constants
========================================

What:  Values the storefront treats as fixed configuration.
Why:   Store settings are hardcoded (the admin settings PUT is rejected), and
       the size list drives ordering of size options everywhere.
"""

# Display order of sizes; ids match the legacy `sizes` lookup table.
SIZES = [
    {"id": 1, "name": "XS", "display_order": 1},
    {"id": 2, "name": "S", "display_order": 2},
    {"id": 3, "name": "M", "display_order": 3},
    {"id": 4, "name": "L", "display_order": 4},
    {"id": 5, "name": "XL", "display_order": 5},
    {"id": 6, "name": "XXL", "display_order": 6},
]

SIZE_ORDER = {size["name"]: size["display_order"] for size in SIZES}

SITE_SETTINGS = {
    "site_name": "Dress Shop",
    "hero_title": "Design Your Perfect Tee",
    "hero_subtitle": (
        "Create custom t-shirts with your unique designs or shop our collection "
        "of ready-made styles."
    ),
    "free_shipping_threshold": 999,
    "shipping_fee": 99,
    "gst_percentage": 18,
    "gst_enabled": True,
}

# Substring identifying URLs hosted on Vercel Blob.
BLOB_HOST_MARKER = "blob.vercel-storage.com"


def sort_sizes(names):
    """Order size names XS → XXL; unknown sizes keep their relative order at the end."""
    return sorted(names, key=lambda name: SIZE_ORDER.get(name, len(SIZE_ORDER) + 1))
