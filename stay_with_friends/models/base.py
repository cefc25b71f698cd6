import uuid

from sqlalchemy.orm import DeclarativeBase


def new_id() -> str:
    """Primary keys are UUID4 strings."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models in this application inherit from this base class to provide
    consistent table metadata and ORM functionality across the database schema.
    """

    pass
