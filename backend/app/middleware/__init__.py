# Middleware package init
"""
Glee Threads Backend — Middleware Package
===========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate Limit first: reject floods before any other work
    2. Request ID: correlation ID available to everything after it
    3. Logging: access line with status and duration, tagged with the ID
"""
