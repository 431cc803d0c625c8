# app/core/supabase_client.py
from supabase import create_client, Client

from app.core.config import Settings
from app.core.errors import ConfigurationError


def supabase_admin(settings: Settings) -> Client:
    """
    Create a Supabase client with the service role key.

    Used by the sheet sync to delete / insert products, which needs to
    bypass RLS.

    WARNING:
      - Never expose service role key to frontend.
      - Only backend should call this.

    Raises:
        ConfigurationError: if SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY
        is not set.
    """
    if not settings.SUPABASE_URL:
        raise ConfigurationError("SUPABASE_URL environment variable is required")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise ConfigurationError("SUPABASE_SERVICE_ROLE_KEY environment variable is required")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
