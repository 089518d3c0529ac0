"""
Request and response schemas for the HTTP API.

Version: 1.0
"""

from concept_server.schemas.user import (
    Message,
    UserCreated,
    UserCredentials,
    UserList,
    UserOut,
    UserUpdate,
)

__all__ = [
    "Message",
    "UserCreated",
    "UserCredentials",
    "UserList",
    "UserOut",
    "UserUpdate",
]
