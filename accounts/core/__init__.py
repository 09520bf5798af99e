"""
Core utilities shared across the accounts API.

Configuration helpers (env vars, feature switches) and logging setup live here
so routers/services do not read os.environ directly.
"""
