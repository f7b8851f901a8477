# Middleware package init
"""
Notes API — Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error response
    carry the correlation id.
"""
