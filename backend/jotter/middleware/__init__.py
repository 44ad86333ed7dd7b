# Middleware package init
"""
Jotter Backend: Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error logged by a
    handler carry the same ID that is returned in X-Request-ID.
"""
