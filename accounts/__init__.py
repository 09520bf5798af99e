"""
User-account backend: registration, login, lookup, deletion and password reset.

Routers (FastAPI endpoints) call the services in ``accounts.services``; services
talk to the database only through ``accounts.repositories``.
"""
