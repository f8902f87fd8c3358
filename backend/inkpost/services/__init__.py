# Services package init
"""
Inkpost Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and stores (persistence).

Service Inventory:
    - TokenService: issues and verifies session tokens (JWT)
    - PasswordHasher: bcrypt hashing and verification
    - slugify: title → URL slug
    - UserService: registration and login
    - BlogService: blog create/update/delete/read rules
"""
