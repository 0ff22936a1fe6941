"""API Layer: FastAPI routes, error handlers and the fault boundary.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
"""
