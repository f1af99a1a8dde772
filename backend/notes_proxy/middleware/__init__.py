# Middleware package init
"""
Notes Proxy — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Errors] → Route Handler

    1. Request ID: correlation ID for logs, error bodies and response headers
    2. Logging: access line with the ID generated above
    3. CORS: answers preflight OPTIONS and adds CORS headers
    4. Errors: unexpected exceptions become a generic 500 inside CORS and
       Request ID, so the response keeps both sets of headers

    The order is reversed for responses.
"""
