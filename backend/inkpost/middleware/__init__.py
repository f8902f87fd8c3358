# Middleware package init
"""
Inkpost Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and error envelopes
    2. Logging: Log request details with the generated request ID
    3. GZip / CORS: Applied by FastAPI's built-in middleware

Per-route gates (token verification, blog attachment, author checks) are
FastAPI dependencies, not middleware; see inkpost.auth.dependencies.
"""
