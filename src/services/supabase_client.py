"""Supabase client wrapper with async context manager support."""

import os
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from src.utils.errors import SupabaseError
import logging

logger = logging.getLogger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def _get_url() -> str:
    url = os.environ.get("SUPABASE_URL")
    if not url:
        raise SupabaseError("SUPABASE_URL must be set")
    return url


def get_supabase_client() -> Client:
    """Get or create the data client singleton (service role)."""
    global _client

    if _client is None:
        url = _get_url()
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

        if not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", extra={"url": url})

    return _client


def get_auth_client() -> Client:
    """
    Create a short-lived client for Supabase Auth calls.

    Signing in on a client swaps its Authorization header to the user's
    token, so auth never goes through the shared data client.
    """
    url = _get_url()
    key = os.environ.get("SUPABASE_ANON_KEY") or os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
    if not key:
        raise SupabaseError("SUPABASE_ANON_KEY or SUPABASE_SERVICE_ROLE_KEY must be set")

    options = ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
    )
    return create_client(url, key, options)


class SupabaseClient:
    """Async context manager for the Supabase data client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        return False
