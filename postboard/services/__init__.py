"""
PostBoard Backend — Services Layer
====================================

Business logic between routes (HTTP) and models (persistence).

Service Inventory:
    - AuthService:  register / login / logout
    - TokenService: bearer token issue / resolve / revoke
    - PostService:  post CRUD with soft delete
    - passwords:    passlib hashing helpers

Services take the request's AsyncSession as an argument and keep no
per-request state, so one module-level instance of each is shared.
"""
