"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (the entity graph is mutated only
      through the synchronizer and the unit of work that owns it)

Design Decisions:
    - Functional core separated from imperative shell
    - Storage is described by Protocols here and implemented in infrastructure/
"""
