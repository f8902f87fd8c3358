# Schemas package init
"""
Inkpost Backend — Pydantic Request/Response Schemas
=====================================================

What:  The API contract. Every response body is an envelope
       `{error, message, ...payload}` (see schemas/common.py).
"""
