"""
User concept: account creation, lookup, authentication and maintenance.

Version: 1.0
"""

# External imports
from bson import ObjectId
from typing import Any, Dict, List, Mapping, Optional
import logging

# Internal imports
from concept_server.core.exceptions import (
    BadValuesError,
    DuplicateKeyError,
    NotAllowedError,
    NotFoundError,
)
from concept_server.core.security import get_password_hash, verify_password
from concept_server.framework.doc import BaseDoc, CollectionRegistry, DocCollection

# Configure module logger
logger = logging.getLogger(__name__)

# Global constants
USERS_COLLECTION = "users"
DELETED_USER = "DELETED_USER"
UPDATABLE_FIELDS = ("username", "password")


class UserDoc(BaseDoc):
    username: str
    password: str


class UserConcept:
    """
    Users stored in a ``DocCollection`` with a unique ``username`` index.
    Passwords are kept as hashes and never leave this class.
    """

    def __init__(self, registry: CollectionRegistry, collection_name: str = USERS_COLLECTION):
        self.users: DocCollection[UserDoc] = registry.collection(collection_name)

    async def ensure_indexes(self) -> None:
        """Create the unique username index backing the uniqueness check."""
        await self.users.collection.create_index("username", unique=True)

    async def create(self, username: str, password: str) -> Dict[str, Any]:
        """
        Create a new user.

        Args:
            username: Desired username, must be non-empty and unused
            password: Plain text password, hashed before storage

        Returns:
            Dict: Message and the sanitized new user

        Raises:
            BadValuesError: If username or password is empty
            NotAllowedError: If the username is taken
        """
        await self._can_create(username, password)
        try:
            _id = await self.users.create_one({
                "username": username,
                "password": get_password_hash(password),
            })
        except DuplicateKeyError as e:
            # Lost a race with a concurrent create of the same username
            raise NotAllowedError(f"User with username {username} already exists!") from e

        logger.info(f"User created: {username}")
        return {"msg": "User created successfully!", "user": await self.get_user_by_id(_id)}

    async def get_user_by_id(self, _id: ObjectId) -> Dict[str, Any]:
        user = await self.users.read_one({"_id": _id})
        if user is None:
            raise NotFoundError("User not found!")
        return self._sanitize(user)

    async def get_user_by_username(self, username: str) -> Dict[str, Any]:
        """
        Look up a user by username.

        Raises:
            BadValuesError: If username is empty
            NotFoundError: If no such user exists
        """
        self._validate_username(username)
        user = await self.users.read_one({"username": username})
        if user is None:
            raise NotFoundError(f"User with username {username} does not exist!")
        return self._sanitize(user)

    async def get_users(self, username: Optional[str] = None) -> List[Dict[str, Any]]:
        """All users sorted by username, or just the one named ``username``."""
        filter = {"username": username} if username else {}
        users = await self.users.read_many(filter, sort=[("username", 1)])
        return [self._sanitize(user) for user in users]

    async def ids_to_usernames(self, ids: List[ObjectId]) -> List[str]:
        """Map user ids to usernames in order; missing users map to ``DELETED_USER``."""
        users = await self.users.read_many({"_id": {"$in": list(ids)}})
        usernames = {user["_id"]: user["username"] for user in users}
        return [usernames.get(_id, DELETED_USER) for _id in ids]

    async def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """
        Check credentials.

        Returns:
            Dict: Message and the user's ``_id``

        Raises:
            NotAllowedError: If the username is unknown or the password is wrong
        """
        user = await self.users.read_one({"username": username})
        if user is None or not verify_password(password, user["password"]):
            logger.warning(f"Failed authentication attempt for username: {username}")
            raise NotAllowedError("Username or password is incorrect!")
        return {"msg": "Successfully authenticated.", "_id": user["_id"]}

    async def update(self, _id: ObjectId, update: Mapping[str, Any]) -> Dict[str, str]:
        """
        Update a user's username and/or password.

        Fields other than ``username`` and ``password`` are ignored.
        """
        safe = {key: value for key, value in update.items() if key in UPDATABLE_FIELDS}
        if "username" in safe:
            await self._can_change_username(_id, safe["username"])
        if "password" in safe:
            self._validate_password(safe["password"])
            safe["password"] = get_password_hash(safe["password"])

        try:
            result = await self.users.partial_update_one({"_id": _id}, safe)
        except DuplicateKeyError as e:
            raise NotAllowedError(f"User with username {safe.get('username')} already exists!") from e

        if result.matched_count == 0:
            raise NotFoundError("User not found!")
        logger.info(f"User updated: {_id}")
        return {"msg": "User updated successfully!"}

    async def delete(self, _id: ObjectId) -> Dict[str, str]:
        await self.users.delete_one({"_id": _id})
        logger.info(f"User deleted: {_id}")
        return {"msg": "User deleted!"}

    async def user_exists(self, _id: ObjectId) -> None:
        if await self.users.count({"_id": _id}) == 0:
            raise NotFoundError(f"User with id {_id} does not exist!")

    @staticmethod
    def _sanitize(user: Mapping[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in user.items() if key != "password"}

    @staticmethod
    def _validate_username(username: str) -> None:
        if not username:
            raise BadValuesError("Username should be at least 1 character long")

    @staticmethod
    def _validate_password(password: str) -> None:
        if not password:
            raise BadValuesError("Password should be at least 1 character long")

    async def _is_username_unique(self, username: str) -> None:
        if await self.users.read_one({"username": username}) is not None:
            raise NotAllowedError(f"User with username {username} already exists!")

    async def _can_create(self, username: str, password: str) -> None:
        self._validate_username(username)
        self._validate_password(password)
        await self._is_username_unique(username)

    async def _can_change_username(self, _id: ObjectId, username: str) -> None:
        self._validate_username(username)
        existing = await self.users.read_one({"username": username})
        if existing is not None and existing["_id"] != _id:
            raise NotAllowedError(f"User with username {username} already exists!")


__all__ = ['UserConcept', 'UserDoc', 'USERS_COLLECTION', 'DELETED_USER']
