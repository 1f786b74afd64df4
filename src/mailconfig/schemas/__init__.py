"""Shared Pydantic schema bases for the mailconfig API"""

from .base import KebabModel, RequestModel

__all__ = [
    "KebabModel",
    "RequestModel",
]
