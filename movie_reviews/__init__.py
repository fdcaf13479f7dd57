"""
Movie Reviews API Application Package.

This package contains the layered movie/review CRUD service: database models
and repositories, application services, and the FastAPI surface.
"""

__version__ = "1.0.0"
