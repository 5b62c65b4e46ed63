"""
HornetHive Database Models
Exports all models for use throughout the application.
"""

from hornethive.models.user import User

__all__ = [
    "User",
]
