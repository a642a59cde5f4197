"""Core Layer: pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Credential policy and record types are pure and deterministic (hash salts aside)
"""
