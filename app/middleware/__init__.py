"""
Middleware package for the Property Listing Service.
"""

from .validation import ValidationMiddleware

__all__ = ["ValidationMiddleware"]
