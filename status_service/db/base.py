"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from status_service.models import delivery_exception as _delivery_exception  # noqa: E402,F401
from status_service.models import order as _order  # noqa: E402,F401
from status_service.models import user as _user  # noqa: E402,F401
