"""
FastAPI routers grouped by domain (auth, content collections, public forms,
uploads, demo seeding).

Each module exposes an APIRouter (or a builder for one) that the application
factory includes in app.py.
"""
