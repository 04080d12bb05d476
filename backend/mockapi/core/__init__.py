"""Core Layer — pure resolution logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic (path matching, route selection,
      body checks, deep-path extraction, notification arming)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
    - Core may import schemas/: the config document models are its input types
"""
