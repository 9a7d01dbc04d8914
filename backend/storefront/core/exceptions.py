# backend/storefront/core/exceptions.py


class StorefrontError(Exception):
    """Base storefront error."""
    pass


class NotFound(StorefrontError):
    """Lookup miss (document, user or catalog category)."""
    pass


class Unauthorized(StorefrontError):
    """Write attempted without a valid admin session."""

    def __init__(self, message: str = "Unauthorized: please login first"):
        super().__init__(message)


class RemoteFailure(StorefrontError):
    """Non-success HTTP status or transport error from the document store."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeMismatch(StorefrontError):
    """Malformed typed-field document."""
    pass
