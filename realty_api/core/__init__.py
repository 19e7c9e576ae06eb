"""
Core utilities shared across the realty API.

This package hosts:
- configuration helpers (env vars, paths, backend selection)
- cross-cutting services such as logging, the error taxonomy,
  password hashing / token signing and rate limit helpers.

Routers and services depend on these primitives instead of reading
os.environ or building HTTP errors by hand.
"""
