"""Error handling utilities."""

from typing import Optional


class TickError(Exception):
    """Base exception for the Tick backend."""
    pass


class SupabaseError(TickError):
    """Supabase client configuration error."""
    pass


class StoreError(TickError):
    """Task store backend call failed."""
    pass


class StoreReadError(StoreError):
    """Reading from the task store failed."""
    pass


class StoreWriteError(StoreError):
    """Writing to the task store failed."""
    pass


class NotFoundError(TickError):
    """Requested task does not exist in the user's partition."""
    pass


class ValidationError(TickError):
    """Caller-side input validation failed."""
    pass


class AuthenticationError(TickError):
    """No authenticated user for the request."""

    def __init__(self, message: str = "Not signed in", redirect_to: Optional[str] = "/sign-in"):
        super().__init__(message)
        self.redirect_to = redirect_to


class AuthorizationError(TickError):
    """Authenticated user does not own the requested partition."""
    pass
