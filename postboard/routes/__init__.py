"""
PostBoard Backend — API Routes Package
========================================

Route Inventory:
    - auth.py:    POST /register, POST /login, POST /logout
    - posts.py:   /v1/posts CRUD (bearer token required)
    - health.py:  GET  /health

Routes handle HTTP concerns only: parse input, call a service, wrap the
result in the envelope. Business rules live in services/.
"""
