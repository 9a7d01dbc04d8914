"""Admin authentication: user directory, session slot and session manager."""
from storefront.services.auth.session import AuthContext, SessionManager, require_authenticated
from storefront.services.auth.store import FileSessionStore, MemorySessionStore, SessionStore
from storefront.services.auth.users import UserDirectory

__all__ = [
    "AuthContext",
    "SessionManager",
    "require_authenticated",
    "FileSessionStore",
    "MemorySessionStore",
    "SessionStore",
    "UserDirectory",
]
