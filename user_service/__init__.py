"""User Directory Service: CRUD over a relational user table behind an RPC surface.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
