"""
Domain common module.

Contains the base exceptions shared by every bounded context.
"""

from .exceptions import DomainError, ValidationError

__all__ = [
    "DomainError",
    "ValidationError",
]
