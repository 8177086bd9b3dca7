"""Pydantic Schemas: request/response contracts for the REST endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, responses)
    - Domain enums from core/ are used directly for enum fields
    - No response schema carries an access token

Design Decisions:
    - Separate from models and core entities: schemas are API contracts,
      models are persistence, entities hold the business rules
    - Response schemas build from entities via from_domain()
"""
