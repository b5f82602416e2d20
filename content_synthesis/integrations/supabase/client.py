"""
Supabase client factory.
"""

import logging
from typing import Optional, Dict, Tuple

from supabase import create_client, Client

from ...core.models.errors import ConfigurationError


logger = logging.getLogger(__name__)

# Cache of clients keyed by (url, key)
_clients: Dict[Tuple[str, str], Client] = {}


def get_supabase_client(url: Optional[str], key: Optional[str]) -> Client:
    """
    Get or create a Supabase client.

    Args:
        url: Supabase project URL
        key: Service role or anon key

    Returns:
        Supabase client instance

    Raises:
        ConfigurationError: If credentials are missing
    """
    if not url or not key:
        raise ConfigurationError(
            "Supabase credentials not found (SUPABASE_URL and SUPABASE_KEY required)",
            config_key="SUPABASE_URL"
        )

    cached = _clients.get((url, key))
    if cached is not None:
        return cached

    client = create_client(url, key)
    _clients[(url, key)] = client
    logger.info("Supabase client initialized successfully")
    return client
