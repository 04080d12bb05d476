"""Services Layer — the imperative shell around the pure resolution core.

Invariants:
    - Services own all awaits (fetching, scheduling); core/ stays synchronous and pure
    - Failures leave services as MockApiError subclasses only

Design Decisions:
    - One module per step of the request cycle for locality (ADR: no god objects)
"""
