"""
PostBoard Backend — Pydantic Schemas
======================================

Request models validate input at the API boundary (one explicit model per
operation). Response models describe the `data` member of the envelope.
"""
