"""
Glee Threads Backend — Content Service
========================================

What:  Store settings and the static content pages (about, contact, FAQs,
       size guide, legal) served to the storefront.
Why:   The storefront renders these pages from JSON so copy changes ship
       with the API instead of requiring a frontend rebuild.
How:   Everything is in-process data. Settings come from SITE_SETTINGS and
       are read-only; the admin settings PUT is rejected by the route.
"""

import copy
from typing import Any, Dict, List

from app.constants import SITE_SETTINGS
from app.exceptions import NotFoundError
from app.schemas.store import ContentPage, PageSummary, SiteSettings

WHATSAPP_NUMBER = "+91 8248333655"
WHATSAPP_LINK = "https://wa.me/918248333655"
INSTAGRAM_HANDLE = "@glee_threads"

SIZE_CHART = [
    {"size": "S", "chest": "34-36", "length": "27", "sleeve": "8.5"},
    {"size": "M", "chest": "38-40", "length": "28", "sleeve": "9"},
    {"size": "L", "chest": "42-44", "length": "29", "sleeve": "9.5"},
    {"size": "XL", "chest": "46-48", "length": "30", "sleeve": "10"},
    {"size": "XXL", "chest": "50-52", "length": "31", "sleeve": "10.5"},
]

_PAGES: Dict[str, Dict[str, Any]] = {
    "about": {
        "title": "About Us",
        "description": (
            "Learn about Glee Threads, our story, values, and commitment to premium "
            "quality custom t-shirts in Coimbatore."
        ),
        "sections": [
            {
                "heading": "Where Comfort Meets Expression",
                "body": (
                    "We started Glee Threads with a simple idea: everyone deserves a t-shirt "
                    "that tells their story. Whether it's your own design or one from our "
                    "curated collection, we make it happen."
                ),
            },
            {
                "heading": "From Passion to Purpose",
                "body": (
                    "Founded in Siddhapudur, Coimbatore, Glee Threads was born from a simple "
                    "frustration: finding quality t-shirts that truly represented who we are. "
                    "We started with a single screen printing machine and a big dream. Today, "
                    "we've helped thousands of customers bring their visions to life."
                ),
            },
            {
                "heading": "What We Stand For",
                "items": [
                    {
                        "title": "Creativity First",
                        "body": "We believe everyone should be able to express their unique style through custom apparel.",
                    },
                    {
                        "title": "Premium Quality",
                        "body": "We use only the finest fabrics and printing techniques to ensure lasting comfort and vibrancy.",
                    },
                    {
                        "title": "Sustainable Practices",
                        "body": "Eco-friendly materials and responsible manufacturing are at the core of everything we do.",
                    },
                    {
                        "title": "Customer Focused",
                        "body": "Your satisfaction is our priority. We provide exceptional support at every step of your journey.",
                    },
                ],
            },
        ],
    },
    "contact": {
        "title": "Contact Us",
        "description": "We'd love to hear from you",
        "sections": [
            {
                "heading": "WhatsApp",
                "body": "Message us for quick support and order queries.",
                "value": WHATSAPP_NUMBER,
                "link": WHATSAPP_LINK,
            },
            {
                "heading": "Instagram",
                "value": INSTAGRAM_HANDLE,
                "link": "https://instagram.com/glee_threads",
            },
            {
                "heading": "Order issues",
                "body": (
                    "For urgent order issues (damaged/incorrect items), please include your "
                    "order number and photos when contacting us."
                ),
            },
        ],
    },
    "faqs": {
        "title": "Frequently Asked Questions",
        "description": (
            "Find answers to common questions about our products, ordering process, "
            "shipping, and more."
        ),
        "sections": [
            {
                "heading": "Ordering",
                "items": [
                    {
                        "question": "How do I place an order?",
                        "answer": (
                            "Browse our collection, select your t-shirt, choose your size and quantity, "
                            "and add it to your cart. For custom designs, use our design tool to upload "
                            "your artwork. Then proceed to checkout."
                        ),
                    },
                    {
                        "question": "Do you offer bulk or wholesale orders?",
                        "answer": (
                            f"Yes! We offer special pricing for bulk orders of 10+ items. Contact us via "
                            f"WhatsApp at {WHATSAPP_NUMBER} or Instagram {INSTAGRAM_HANDLE} for quotes."
                        ),
                    },
                ],
            },
            {
                "heading": "Custom Designs",
                "items": [
                    {
                        "question": "What file formats do you accept for custom designs?",
                        "answer": (
                            "We accept PNG, JPG, SVG, and PDF files. For best results use high-resolution "
                            "PNG files (at least 300 DPI) with transparent backgrounds."
                        ),
                    },
                    {
                        "question": "What are the size requirements for custom artwork?",
                        "answer": (
                            "Artwork should be at least 2000 x 2000 pixels. The maximum print area is "
                            '12" x 16" for the front and back of t-shirts.'
                        ),
                    },
                ],
            },
            {
                "heading": "Shipping",
                "items": [
                    {
                        "question": "How long does shipping take?",
                        "answer": (
                            "Standard shipping takes 5-7 business days. Custom orders require an "
                            "additional 2-3 days for production before shipping."
                        ),
                    },
                    {
                        "question": "Is shipping free?",
                        "answer": (
                            f"Orders above ₹{SITE_SETTINGS['free_shipping_threshold']} ship free. "
                            f"Smaller orders have a flat ₹{SITE_SETTINGS['shipping_fee']} shipping fee."
                        ),
                    },
                ],
            },
            {
                "heading": "Returns & Refunds",
                "items": [
                    {
                        "question": "What is your return policy?",
                        "answer": (
                            "We accept returns within 30 days of delivery for ready-made items in original "
                            "condition. Custom-designed items are final sale unless there's a printing defect."
                        ),
                    },
                    {
                        "question": "What if my order arrives damaged or incorrect?",
                        "answer": (
                            "Contact us within 48 hours with photos of the issue. We'll send a replacement "
                            "at no charge or issue a full refund."
                        ),
                    },
                ],
            },
            {
                "heading": "Product & Sizing",
                "items": [
                    {
                        "question": "What materials are your t-shirts made of?",
                        "answer": "Our standard tees are 100% premium combed cotton (180 GSM).",
                    },
                    {
                        "question": "How do I find my size?",
                        "answer": (
                            "Check our size guide for detailed measurements. Measure a t-shirt that fits "
                            "you well and compare it to the chart. When in doubt, size up!"
                        ),
                    },
                ],
            },
        ],
    },
    "size-guide": {
        "title": "Size Guide",
        "description": (
            "Use the chart below to find the best fit. Measure a t-shirt that fits you "
            "well and compare the measurements."
        ),
        "sections": [
            {"heading": "Size chart", "unit": "inches", "rows": SIZE_CHART},
            {
                "heading": "How to measure",
                "items": [
                    {
                        "title": "Chest",
                        "body": 'Measure across the chest 1" below the armholes while the shirt is laid flat; double this measurement.',
                    },
                    {
                        "title": "Length",
                        "body": "Measure from the highest point on the shoulder to the bottom hem.",
                    },
                    {
                        "title": "Sleeve",
                        "body": "Measure from the shoulder seam to the end of the sleeve.",
                    },
                ],
            },
            {
                "heading": "Between sizes?",
                "body": (
                    "If you're between sizes, we recommend sizing up for a comfortable fit. For "
                    "custom fits or bulk orders, contact us via WhatsApp."
                ),
            },
        ],
    },
    "legal": {
        "title": "Privacy, Terms & Cookies",
        "description": (
            "Everything you need to know about how Glee Threads collects data, the rules "
            "for using the site, and how cookies are used."
        ),
        "sections": [
            {
                "heading": "Privacy Policy",
                "body": (
                    "We collect information you provide when placing orders or contacting support "
                    "and certain technical information automatically. This information is used to "
                    "process orders, improve our service, and provide support. We never sell your "
                    "personal data to third parties."
                ),
            },
            {
                "heading": "Terms of Service",
                "body": (
                    "By using this site and placing orders you agree to these terms. Orders are "
                    "subject to availability and acceptance. All payments are final unless we "
                    "approve a refund."
                ),
            },
            {
                "heading": "Cookie Policy",
                "body": (
                    "We use cookies to provide basic site functionality, remember preferences, and "
                    "for analytics. You can control cookie usage through your browser settings."
                ),
            },
        ],
    },
}


class ContentService:

    def get_settings(self) -> SiteSettings:
        return SiteSettings(**SITE_SETTINGS)

    def list_pages(self) -> List[PageSummary]:
        return [PageSummary(slug=slug, title=page["title"]) for slug, page in _PAGES.items()]

    def get_page(self, slug: str) -> ContentPage:
        page = _PAGES.get(slug)
        if page is None:
            raise NotFoundError("Page not found", resource="page", resource_id=slug)
        return ContentPage(slug=slug, **copy.deepcopy(page))


content_service = ContentService()
