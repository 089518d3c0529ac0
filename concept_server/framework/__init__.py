"""
Persistence framework shared by the concepts.

Version: 1.0
"""

from concept_server.framework.doc import (
    BaseDoc,
    CollectionRegistry,
    DocCollection,
)

__all__ = [
    "BaseDoc",
    "CollectionRegistry",
    "DocCollection",
]
