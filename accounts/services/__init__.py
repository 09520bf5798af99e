"""
High-level use cases for the accounts API.

Routers (FastAPI endpoints) should call these services instead of opening
database sessions directly.
"""
