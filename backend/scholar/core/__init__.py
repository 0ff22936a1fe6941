"""Core Layer: pure domain logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Prompt building and response sanitizing are pure and deterministic
"""
