"""
Sessioning concept: who, if anyone, is logged in on a web session.

The session mapping itself (cookie signing, storage) belongs to the web
framework; this concept only reads and writes the ``user`` key.

Version: 1.0
"""

from bson import ObjectId
from bson.errors import InvalidId
from typing import Any, MutableMapping

from concept_server.core.exceptions import NotAllowedError, UnauthenticatedError

WebSession = MutableMapping[str, Any]

SESSION_USER_KEY = "user"


class SessioningConcept:

    def start(self, session: WebSession, user: ObjectId) -> None:
        self.is_logged_out(session)
        session[SESSION_USER_KEY] = str(user)

    def end(self, session: WebSession) -> None:
        self.is_logged_in(session)
        session.pop(SESSION_USER_KEY, None)

    def get_user(self, session: WebSession) -> ObjectId:
        self.is_logged_in(session)
        try:
            return ObjectId(session[SESSION_USER_KEY])
        except InvalidId as e:
            raise UnauthenticatedError("Session is not valid, please log in again!") from e

    def is_logged_in(self, session: WebSession) -> None:
        if not session.get(SESSION_USER_KEY):
            raise UnauthenticatedError("Must be logged in!")

    def is_logged_out(self, session: WebSession) -> None:
        if session.get(SESSION_USER_KEY):
            raise NotAllowedError("Must be logged out!")


__all__ = ['SessioningConcept', 'WebSession', 'SESSION_USER_KEY']
