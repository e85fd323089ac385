"""Pydantic Schemas: response shapes for API endpoints.

Invariants:
    - Schemas are API contracts; models are persistence
"""
