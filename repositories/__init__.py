"""
Repositories package - Data access layer.

This package contains repository classes that own cached data and its
persistence, isolating the services and front ends from storage details.
"""

from repositories.image_repository import ImageRepository

__all__ = ["ImageRepository"]
