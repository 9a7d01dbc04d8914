"""Password login with a single persisted admin session."""
import logging
from typing import Callable, Protocol

from pydantic import ValidationError

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import Unauthorized
from storefront.core.security import generate_session_token, verify_password
from storefront.models.session import Session
from storefront.services.auth.store import SessionStore
from storefront.services.auth.users import UserDirectory
from storefront.utils.timestamps import now_ms

logger = logging.getLogger(__name__)


class AuthContext(Protocol):
    """What write operations need to know about the caller."""

    def is_valid(self) -> bool: ...

    def touch(self) -> None: ...

    def clear(self) -> None: ...


def require_authenticated(auth: AuthContext | None) -> None:
    """Raise Unauthorized unless the context holds a valid session."""
    if auth is None or not auth.is_valid():
        raise Unauthorized()


class SessionManager:
    """
    Tracks one logged-in admin per running client.

    States are anonymous (``current_user is None``) and authenticated. A
    session is valid while ``now - loginTime`` is below the configured timeout
    and its project id matches the active configuration; any other state is
    cleared on the next check.
    """

    def __init__(
        self,
        users: UserDirectory,
        store: SessionStore,
        config: Settings | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.users = users
        self.store = store
        self.config = config or default_settings
        self.clock = clock
        self.current_user: Session | None = None

    @property
    def timeout_ms(self) -> int:
        return self.config.session_timeout_ms

    def restore(self) -> bool:
        """Load the persisted session, dropping it if stale or foreign."""
        payload = self.store.load()
        if payload is None:
            return False

        try:
            session = Session.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Discarding malformed stored session: {e}")
            self.logout()
            return False

        if not session.is_valid(self.clock(), self.timeout_ms, self.config.firebase_project_id):
            logger.info("Stored session expired or belongs to another project")
            self.logout()
            return False

        self.current_user = session
        return True

    async def login(self, username: str, password: str) -> bool:
        """Check credentials against the users collection and start a session."""
        user = await self.users.get_user_by_username(username)

        if user is None:
            logger.info("Login rejected: user not found")
            return False

        if not user.active:
            logger.info("Login rejected: user account is deactivated")
            return False

        if not verify_password(password, user.password_hash):
            logger.info("Login rejected: invalid password")
            return False

        login_time = self.clock()
        self.current_user = Session(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            login_time=login_time,
            token=generate_session_token(login_time),
            project_id=self.config.firebase_project_id,
        )
        self.store.save(self.current_user.to_storage())
        logger.info(f"Login successful for {user.username}")
        return True

    def logout(self) -> None:
        self.current_user = None
        self.store.clear()
        logger.info("Logged out")

    def is_authenticated(self) -> bool:
        if self.current_user is None:
            return False

        if self.current_user.is_expired(self.clock(), self.timeout_ms):
            logger.info("Session expired")
            self.logout()
            return False

        # Guards against a session file carried over from another deployment
        if self.current_user.project_id != self.config.firebase_project_id:
            logger.warning("Session project id does not match configuration")
            self.logout()
            return False

        return True

    def refresh_session(self) -> None:
        """Slide the timeout window forward if authenticated."""
        if self.is_authenticated():
            self.current_user.login_time = self.clock()
            self.store.save(self.current_user.to_storage())

    def require_authenticated(self) -> Session:
        require_authenticated(self)
        return self.current_user

    # AuthContext
    is_valid = is_authenticated
    touch = refresh_session
    clear = logout
