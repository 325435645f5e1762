"""Portfolio API Package — games stats, pricing and reviews for the studio site.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
