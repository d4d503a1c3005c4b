from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions

from lawdesk.core.config import Settings


def get_supabase_client(settings: Settings) -> Client:
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set for the cloud backend")
    # Create Supabase client with bounded request timeouts
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_KEY,
        options=ClientOptions(
            postgrest_client_timeout=10,
            storage_client_timeout=10,
        ),
    )
