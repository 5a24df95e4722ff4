"""
FastAPI routers for all API endpoints.

Each module defines a router for a specific domain (recommendations, analysis,
health). Recommendation faults are mapped to HTTP errors in routes/errors.py.
"""
