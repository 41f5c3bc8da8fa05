"""
Cœur métier de Puter Proxy.
Modules indépendants sans dépendances externes au package.
"""

from .exceptions import (
    PuterProxyError,
    MethodNotAllowedError,
    ConfigurationError,
    UnknownCategoryError,
    UnsupportedMethodError,
    InvalidBodyError,
    UpstreamError,
)
from .constants import (
    PUTER_API_BASE_URL,
    DEFAULT_CHAT_MODEL,
    MAX_BODY_SIZE,
    ENDPOINT_DRIVERS_CALL,
)
from .models import (
    Category,
    FsRoute,
    AiRoute,
    KvRoute,
    ChatRoute,
    Route,
    InboundRequest,
    OutboundRequest,
)

__all__ = [
    # Exceptions
    "PuterProxyError",
    "MethodNotAllowedError",
    "ConfigurationError",
    "UnknownCategoryError",
    "UnsupportedMethodError",
    "InvalidBodyError",
    "UpstreamError",
    # Constants
    "PUTER_API_BASE_URL",
    "DEFAULT_CHAT_MODEL",
    "MAX_BODY_SIZE",
    "ENDPOINT_DRIVERS_CALL",
    # Models
    "Category",
    "FsRoute",
    "AiRoute",
    "KvRoute",
    "ChatRoute",
    "Route",
    "InboundRequest",
    "OutboundRequest",
]
