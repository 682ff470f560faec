"""
API routers.
"""

from . import tasks

__all__ = ["tasks"]
