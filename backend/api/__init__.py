"""
Lectern API package.

Provides the FastAPI application for the Lectern course marketplace.
The application itself lives in api.app so that feature modules can import
api.dependencies without pulling in every router.
"""
