"""User model - identities referenced by sessions and file ownership.

Accounts are provisioned elsewhere; this service only reads them.
"""
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from files_manager.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
