"""
FastAPI routers grouped by domain.

Each module exposes a builder returning an APIRouter that app.py includes.
"""
