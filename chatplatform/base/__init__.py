"""
Base infrastructure package.
Contains base classes for DTOs and HTTP repositories.
"""

from .dto_base import BaseDTO
from .repository import BaseRepository

__all__ = ['BaseDTO', 'BaseRepository']
