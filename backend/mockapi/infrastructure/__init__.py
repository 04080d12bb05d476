"""Infrastructure Layer — outbound HTTP clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports pure resolution logic from core/ (errors and types only)
    - All external calls bounded by a timeout and mapped to core/errors.py types

Design Decisions:
    - Thin wrappers over a shared httpx.AsyncClient (ADR: single responsibility)
"""
