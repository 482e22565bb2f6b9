"""
Routers package for FastAPI endpoints.

- scorecard: Scorecard analysis endpoints
"""

from . import scorecard

__all__ = ["scorecard"]
