"""
Persistence adapters.

Services depend on the repository object they are given rather than opening
database sessions themselves.
"""
