"""
High-level use cases for the realty API.

Each service module orchestrates a storage backend to implement business
rules (login, content CRUD, public submissions, backups, uploads).

Routers (FastAPI endpoints) call these services instead of touching
storage directly.
"""
