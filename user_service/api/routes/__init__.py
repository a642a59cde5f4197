"""Route Modules: one file per surface (RPC methods, health probes).

Invariants:
    - Each module defines its own APIRouter with prefix and tags
"""
