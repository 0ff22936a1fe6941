"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the HTTP boundary; core re-validates operations
    - Domain enums from core/ used for enum fields
"""
