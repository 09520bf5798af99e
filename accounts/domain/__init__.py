"""Domain rules (validation, outward views) independent of storage and HTTP."""
