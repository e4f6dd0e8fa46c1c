"""Route Modules — one file per aggregate plus health.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to the aggregate services)
    - Routes never catch domain errors; the global handlers map them

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
