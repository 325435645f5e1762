"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (admin request bodies, games response)
    - Lenient coercions come from core/content_fields.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
