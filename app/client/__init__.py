"""
Client side of the idiom editor: HTTP client, browse ordering,
type-code generation and the browser view-model.
"""

from .api_client import ClientTimeoutError, IdiomApiClient, IdiomApiError
from .browse import (
    UNCLASSIFIED,
    BrowseCursor,
    browse_order,
    group_idioms,
    is_classified,
    sort_idioms,
    sort_key,
)
from .store import IdiomBrowserStore, Notification
from .type_codes import MINOR_PREFIX, generate_type_code

__all__ = [
    "IdiomApiClient",
    "IdiomApiError",
    "ClientTimeoutError",
    "UNCLASSIFIED",
    "BrowseCursor",
    "browse_order",
    "group_idioms",
    "is_classified",
    "sort_idioms",
    "sort_key",
    "IdiomBrowserStore",
    "Notification",
    "MINOR_PREFIX",
    "generate_type_code",
]
