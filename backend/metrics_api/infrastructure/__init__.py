"""Infrastructure Layer: database access, repository adapters, logging.

Invariants:
    - Infrastructure implements core protocols; core never imports infrastructure
    - Every SQLAlchemy failure is mapped to a DatabaseError before leaving this layer
"""
