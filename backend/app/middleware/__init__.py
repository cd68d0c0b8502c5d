# Middleware package init
"""
Inkwell Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation id for every log line of the request
    2. Logging: one access line per request, with the request id
    3. GZip / CORS: FastAPI's stock middlewares

    Responses travel back through the same chain in reverse, so the
    access line sees the final status code and the X-Request-ID header
    is set on every response, errors included.
"""
