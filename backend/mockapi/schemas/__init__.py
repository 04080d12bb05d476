"""Pydantic Schemas — validation of the user-authored mock configuration document.

Invariants:
    - Schemas validate at system boundary (remote config document)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Frozen models: a parsed config is immutable for the lifetime of one request
"""
