"""
PostBoard Backend — Middleware Package
========================================

Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    [Rate Limit] → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    1. Rate Limit rejects abusive clients before any other work
    2. Request ID sets the correlation ID used by every later log line
    3. Access Log records status and duration with that ID
"""
