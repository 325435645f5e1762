"""Infrastructure Layer — database, upstream HTTP, sessions, rate limiting, logging.

Invariants:
    - Outbound HTTP calls carry an explicit timeout and report failures as values
    - SQLAlchemy errors are mapped to DatabaseError before leaving this layer
"""
