"""Database Repositories - Owner-scoped data access."""

from mindwell.features.database.repositories.moods import MoodsRepository
from mindwell.features.database.repositories.journals import JournalsRepository

__all__ = [
    "MoodsRepository",
    "JournalsRepository",
]
