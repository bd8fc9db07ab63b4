"""Context store: caller authentication and profile/document reads."""

from .base import ContextStore, StoreSession  # noqa: F401
from .deps import get_context_store  # noqa: F401
from .supabase import SupabaseContextStore  # noqa: F401
