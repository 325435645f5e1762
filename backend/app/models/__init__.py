"""ORM Models — SQLAlchemy declarative models for the content tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Both tables are flat: no foreign keys, integer primary keys

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all
      and Alembic autogenerate
"""

from app.models.pricing_item import PricingItem  # noqa: F401
from app.models.review import Review  # noqa: F401
