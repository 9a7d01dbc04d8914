"""Admin user accounts stored in the Firestore ``users`` collection."""
import logging

from pydantic import ValidationError

from storefront.core.exceptions import DecodeMismatch, RemoteFailure
from storefront.core.security import hash_password
from storefront.models.user import UserRecord, UserRole
from storefront.services.firestore.client import FirestoreClient
from storefront.services.firestore.codec import decode, document_id, encode
from storefront.utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

USERS = "users"


class UserDirectory:
    """Lookup and administration of admin accounts."""

    def __init__(self, client: FirestoreClient):
        self.client = client

    async def _fetch_all(self) -> list[UserRecord]:
        documents = await self.client.list_documents(USERS)
        users = []
        for doc in documents:
            record = decode(doc)
            if record is None:
                continue
            try:
                users.append(UserRecord.from_record(record))
            except ValidationError as e:
                logger.warning(f"Skipping malformed user document {record.get('id')}: {e}")
        return users

    async def get_user_by_username(self, username: str) -> UserRecord | None:
        """Find a user by exact username (scans the whole collection)."""
        try:
            users = await self._fetch_all()
        except (RemoteFailure, DecodeMismatch) as e:
            logger.error(f"Error getting user: {e}")
            return None

        for user in users:
            if user.username == username:
                return user
        return None

    async def list_users(self) -> list[UserRecord]:
        try:
            return await self._fetch_all()
        except (RemoteFailure, DecodeMismatch) as e:
            logger.error(f"Error getting users: {e}")
            return []

    async def create_user(
        self,
        username: str,
        password: str,
        email: str = "",
        role: str = UserRole.ADMIN.value,
    ) -> UserRecord:
        """Create an active user. The password is stored only as a digest."""
        user = UserRecord(
            id="",
            username=username,
            password_hash=hash_password(password),
            email=email or "",
            role=role or UserRole.ADMIN.value,
            active=True,
            created_at=utc_now_iso(),
        )
        payload = user.model_dump(by_alias=True, exclude={"id"})

        try:
            result = await self.client.request("POST", f"/{USERS}", encode(payload))
        except RemoteFailure as e:
            logger.error(f"Error creating user: {e}")
            raise

        logger.info(f"User {username} created")
        return user.model_copy(update={"id": document_id(result.get("name")) or ""})

    async def update_user(
        self,
        user_id: str,
        password: str | None = None,
        email: str | None = None,
        role: str | None = None,
        active: bool | None = None,
    ) -> bool:
        """Patch only the supplied attributes of a user."""
        updates: dict[str, str | bool] = {}
        if password:
            updates["passwordHash"] = hash_password(password)
        if email is not None:
            updates["email"] = email
        if role is not None:
            updates["role"] = role
        if active is not None:
            updates["active"] = active

        if not updates:
            return True

        mask = [("updateMask.fieldPaths", key) for key in updates]
        try:
            await self.client.request(
                "PATCH", f"/{USERS}/{user_id}", encode(updates), params=mask
            )
        except RemoteFailure as e:
            logger.error(f"Error updating user: {e}")
            raise

        logger.info(f"User {user_id} updated")
        return True

    async def delete_user(self, user_id: str) -> bool:
        try:
            await self.client.request("DELETE", f"/{USERS}/{user_id}")
        except RemoteFailure as e:
            logger.error(f"Error deleting user: {e}")
            raise

        logger.info(f"User {user_id} deleted")
        return True
