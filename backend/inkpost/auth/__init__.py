# Auth package init
"""
Inkpost Backend — Auth Chain
==============================

What:  Token verification, blog attachment and author authorization as
       FastAPI dependencies, plus the context values they hand downstream.
"""
