"""Scrabble Scholar: structured AI query orchestration for Scrabble tools.

Invariants:
    - Package root contains no executable code (no import side-effects)
"""
