"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter
    - Routes never contain business logic (delegate to services)

Design Decisions:
    - Explicit registration in main.py over auto-discovery (ADR: anti-pattern)
    - health registered before mock_api: the catch-all mock route must not shadow the health check
"""
