"""Infrastructure Layer — database access, repositories and logging.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols
    - All SQLAlchemy failures surface as core.errors.DatabaseError

Design Decisions:
    - Repositories take the request's AsyncSession: one session = one transaction
"""
