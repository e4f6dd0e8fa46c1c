"""Infrastructure Layer — database access, Identity Store implementations, logging.

Invariants:
    - Infrastructure never contains domain rules (no cascade or sync logic here)
    - All SQLAlchemy failures mapped to DatabaseError at the session boundary

Design Decisions:
    - SQL stores translate rows <-> entity nodes; services only ever see nodes
"""
