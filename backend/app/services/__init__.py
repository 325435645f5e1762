"""Services Layer — games aggregation and content persistence.

Invariants:
    - Services receive their collaborators (session, upstream) as arguments
    - Shaping and validation rules live in core/ and schemas/, not here
"""
