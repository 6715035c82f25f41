"""
PostBoard Backend — Application Package
=========================================

A small blog backend: token authentication plus CRUD on posts, every
response wrapped in a {data, message, statusCode} envelope.

Layers:
    routes/     HTTP concerns (FastAPI routers)
    services/   business rules (auth, tokens, posts)
    schemas/    pydantic request/response models
    models/     SQLAlchemy ORM tables
    database.py async engine and per-request sessions
"""

__version__ = "1.0.0"
