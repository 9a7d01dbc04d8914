from storefront.models.session import Session
from storefront.models.user import UserRecord, UserRole

__all__ = [
    "Session",
    "UserRecord", "UserRole",
]
