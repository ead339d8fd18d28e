"""
API routers package.
"""

from hets.routers import health, rental_requests

__all__ = [
    "health",
    "rental_requests",
]
