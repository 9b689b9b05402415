"""
User Use Cases

All user-related business logic.
"""

from .load_current_user_use_case import LoadCurrentUserUseCase

__all__ = [
    "LoadCurrentUserUseCase",
]
