"""SQLAlchemy models for user accounts."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, String, Text

from .session import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    username = Column(String(255), unique=True, nullable=False, index=True)
    # Stored as received: passwords are compared verbatim at login.
    password = Column(Text, nullable=False)
    date_joined = Column(DateTime(timezone=True), nullable=False)
