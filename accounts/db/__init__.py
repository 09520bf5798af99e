"""Database helpers: declarative base, cached engine and per-call sessions."""

from .session import Base, get_engine, get_session, reset_engine

__all__ = ["Base", "get_engine", "get_session", "reset_engine"]
