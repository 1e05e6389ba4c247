"""Supabase client singleton for table and storage operations."""

from functools import lru_cache
from typing import Any

from supabase import Client, create_client

from src.core.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get cached Supabase client singleton.

    The same client serves the profile table (document store) and the
    image bucket (blob store). Uses the secret key, so it must only be
    used server-side.

    Returns:
        Client: Supabase client instance.
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
    )


async def check_database_connection() -> dict[str, Any]:
    """Check if the profile table is reachable.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client = get_supabase_client()
        client.table(get_settings().profiles_table).select("id").limit(1).execute()
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}


async def check_storage_connection() -> dict[str, Any]:
    """Check if the image bucket is reachable.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client = get_supabase_client()
        client.storage.get_bucket(get_settings().images_bucket)
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}
