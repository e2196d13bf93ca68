from .database import Database
from .memory import MemoryDatabase


def create_database(config):
    """Build the storage backend selected by `config.STORAGE_BACKEND`"""
    if config.STORAGE_BACKEND == "memory":
        return MemoryDatabase()
    return Database(config.DATABASE_URL)


__all__ = ['Database', 'MemoryDatabase', 'create_database']
