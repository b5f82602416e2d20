"""
Supabase integration: storage bucket listing and content tables.
"""

from .client import get_supabase_client
from .storage import SupabaseStorage
from .store import SupabaseContentStore

__all__ = [
    'get_supabase_client',
    'SupabaseStorage',
    'SupabaseContentStore'
]
