"""ORM Models: SQLAlchemy declarative models.

Invariants:
    - All models imported here so Base.metadata is complete before create_all
"""

from gifapi.models.gif import Gif  # noqa: F401
