"""Core Layer: pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Entities are immutable; every mutation returns a new instance
    - Validation failures raise ValidationError synchronously

Design Decisions:
    - Functional core separated from imperative shell
"""
