"""Infrastructure Layer — database pool, repository implementation, logging setup.

Invariants:
    - Only this layer imports SQLAlchemy engine/session machinery
    - Implements the protocols declared in core/repository_protocols.py
"""
