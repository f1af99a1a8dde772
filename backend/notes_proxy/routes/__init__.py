# Routes package init
"""
Notes Proxy — API Routes Package
=================================

Route Inventory:
    - proxy.py:   POST /revise        (revise one note)
                  POST /synthesize    (combine two or more notes)
    - health.py:  GET  /health        (service health check)

Routes are THIN: they decode the body and call ProxyService. Business logic
and validation live in the services package.
"""
