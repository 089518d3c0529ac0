"""
Application actions composed from the concepts.

``Routes`` is transport-agnostic: every action takes the caller's session
mapping explicitly, so the same object backs the HTTP endpoints and is
driven directly from tests.

Version: 1.0
"""

from typing import Any, Dict, List, Mapping

from concept_server.concepts.sessioning import SessioningConcept, WebSession
from concept_server.concepts.user import UserConcept
from concept_server.framework.doc import CollectionRegistry


class Routes:
    """Actions exposed by the application."""

    def __init__(self, registry: CollectionRegistry):
        self.registry = registry
        self.user = UserConcept(registry)
        self.session = SessioningConcept()

    async def setup(self) -> None:
        """Create indexes; safe to call more than once."""
        await self.user.ensure_indexes()

    async def get_session_user(self, session: WebSession) -> Dict[str, Any]:
        user = self.session.get_user(session)
        return await self.user.get_user_by_id(user)

    async def get_users(self) -> List[Dict[str, Any]]:
        return await self.user.get_users()

    async def get_user(self, username: str) -> Dict[str, Any]:
        return await self.user.get_user_by_username(username)

    async def create_user(self, session: WebSession, username: str, password: str) -> Dict[str, Any]:
        self.session.is_logged_out(session)
        return await self.user.create(username, password)

    async def update_user(self, session: WebSession, update: Mapping[str, Any]) -> Dict[str, str]:
        user = self.session.get_user(session)
        return await self.user.update(user, update)

    async def delete_user(self, session: WebSession) -> Dict[str, str]:
        user = self.session.get_user(session)
        self.session.end(session)
        return await self.user.delete(user)

    async def log_in(self, session: WebSession, username: str, password: str) -> Dict[str, str]:
        self.session.is_logged_out(session)
        user = await self.user.authenticate(username, password)
        self.session.start(session, user["_id"])
        return {"msg": "Logged in!"}

    async def log_out(self, session: WebSession) -> Dict[str, str]:
        self.session.end(session)
        return {"msg": "Logged out!"}


__all__ = ['Routes']
