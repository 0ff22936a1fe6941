"""Infrastructure Layer: external service clients and cross-cutting concerns.

Invariants:
    - Every backend call is wrapped with error mapping (no retries)
    - Logging setup and preference persistence live here
"""
