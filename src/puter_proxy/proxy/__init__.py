"""
Logique de proxy HTTP vers l'API Puter.
"""

from .router import (
    split_path,
    parse_route,
    build_outbound_request,
    translate,
)
from .transformers import (
    build_driver_call,
    build_chat_completion_args,
    build_chat_completion_call,
)
from .stream import (
    is_ndjson_response,
    format_sse_event,
    ndjson_to_sse,
)
from .client import create_proxy_client, ProxyClient

__all__ = [
    "split_path",
    "parse_route",
    "build_outbound_request",
    "translate",
    "build_driver_call",
    "build_chat_completion_args",
    "build_chat_completion_call",
    "is_ndjson_response",
    "format_sse_event",
    "ndjson_to_sse",
    "create_proxy_client",
    "ProxyClient",
]
