"""
Database package initialization module.

Version: 1.0
"""

from concept_server.db.mongodb import (
    init_mongodb,
    get_database,
    close_mongodb_connection
)

__all__ = [
    "init_mongodb",
    "get_database",
    "close_mongodb_connection"
]
