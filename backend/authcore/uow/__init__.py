"""Unit of Work abstractions and their SQLAlchemy implementation."""

from authcore.uow.base import UnitOfWork
from authcore.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

__all__ = ["SQLAlchemyUnitOfWork", "UnitOfWork"]
