"""
Middleware package for the Rentify API.
"""

from .validation import RequestSizeLimitMiddleware

__all__ = [
    "RequestSizeLimitMiddleware"
]
