"""
Application concepts built on the persistence framework.

Version: 1.0
"""

from concept_server.concepts.sessioning import SessioningConcept, WebSession
from concept_server.concepts.user import UserConcept

__all__ = [
    "SessioningConcept",
    "UserConcept",
    "WebSession",
]
