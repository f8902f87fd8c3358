# Routes package init
"""
Inkpost Backend — API Routes Package
======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - auth.py:    POST /api/auth/register, /api/auth/create-account
                  POST /api/auth/login
                  GET  /api/auth/get-user
    - blogs.py:   GET/POST /api/blogs
                  GET/PUT/DELETE /api/blogs/{blog_id}
                  GET  /api/blog/{slug}
    - health.py:  GET  /, GET /health

Design Principle:
    Routes are THIN: they declare the auth chain, call a service and wrap
    the result in the response envelope.
"""
