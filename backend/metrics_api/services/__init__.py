"""Services Layer: application use cases for organizations, users, and contributors.

Invariants:
    - One service per aggregate; repositories injected through the constructor
    - Every public method returns Result; domain ValidationErrors become Err
    - Services never see SQLAlchemy types

Design Decisions:
    - Explicit constructor injection (api/dependencies.py wires them per request)
"""
