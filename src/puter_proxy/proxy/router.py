"""
Routing des requêtes vers les endpoints Puter.

Deux étapes:
1. `parse_route()` transforme le chemin en variante taggée (FsRoute, ...)
2. `build_outbound_request()` dispatche sur le type de la variante

Toute erreur est levée avant le moindre appel sortant.
"""
from typing import Any, Callable, Dict, Tuple
import logging

from ..core.constants import (
    FS_ENDPOINTS,
    AI_DRIVERS,
    ENDPOINT_DRIVERS_CALL,
    INTERFACE_KVSTORE,
    DEFAULT_CHAT_MODEL,
)
from ..core.exceptions import UnknownCategoryError, UnsupportedMethodError
from ..core.models import (
    Category,
    FsRoute,
    AiRoute,
    KvRoute,
    ChatRoute,
    Route,
    InboundRequest,
    OutboundRequest,
)
from ..config.settings import Settings
from .transformers import build_driver_call, build_chat_completion_call

logger = logging.getLogger(__name__)

# Catégorie -> constructeur de variante
ROUTE_FACTORIES: Dict[Category, Callable[[str], Route]] = {
    "fs": FsRoute,
    "ai": AiRoute,
    "kv": KvRoute,
    "chat": lambda method: ChatRoute(alias="chat"),
    "completions": lambda method: ChatRoute(alias="completions"),
}


def split_path(path: str) -> Tuple[str, str]:
    """
    Découpe le chemin en (catégorie, méthode).

    Ex: "fs/readdir" -> ("fs", "readdir"), "kv/a/b" -> ("kv", "a/b")
    """
    segments = (path or "").split("/")
    return segments[0], "/".join(segments[1:])


def parse_route(path: str) -> Route:
    """
    Transforme le chemin entrant en route.

    Raises:
        UnknownCategoryError: Si la catégorie n'est pas reconnue
    """
    category, method = split_path(path)
    factory = ROUTE_FACTORIES.get(category)
    if factory is None:
        raise UnknownCategoryError(category)
    return factory(method)


def build_outbound_request(
    route: Route,
    body: Any,
    credential: str,
    default_chat_model: str = DEFAULT_CHAT_MODEL
) -> OutboundRequest:
    """
    Construit l'appel sortant pour une route.

    Args:
        route: Route résolue
        body: Body JSON entrant
        credential: Token Puter
        default_chat_model: Modèle par défaut pour chat/completions

    Returns:
        OutboundRequest prête à être envoyée

    Raises:
        UnsupportedMethodError: Si la méthode n'est pas mappée
    """
    if isinstance(route, FsRoute):
        endpoint = FS_ENDPOINTS.get(route.method)
        if endpoint is None:
            raise UnsupportedMethodError("fs", route.method)
        return OutboundRequest(endpoint=endpoint, payload=body, credential=credential)

    if isinstance(route, AiRoute):
        driver_entry = AI_DRIVERS.get(route.method)
        if driver_entry is None:
            raise UnsupportedMethodError("ai", route.method)
        interface, driver, driver_method = driver_entry
        payload = build_driver_call(interface, driver_method, body, driver=driver)
        return OutboundRequest(endpoint=ENDPOINT_DRIVERS_CALL, payload=payload, credential=credential)

    if isinstance(route, KvRoute):
        payload = build_driver_call(INTERFACE_KVSTORE, route.method, body)
        return OutboundRequest(endpoint=ENDPOINT_DRIVERS_CALL, payload=payload, credential=credential)

    if isinstance(route, ChatRoute):
        payload = build_chat_completion_call(body, default_chat_model)
        return OutboundRequest(endpoint=ENDPOINT_DRIVERS_CALL, payload=payload, credential=credential)

    raise TypeError(f"Route non gérée: {route!r}")


def translate(inbound: InboundRequest, settings: Settings) -> OutboundRequest:
    """Requête entrante -> appel sortant Puter."""
    route = parse_route(inbound.path)
    outbound = build_outbound_request(
        route,
        inbound.body,
        settings.puter_token,
        default_chat_model=settings.default_chat_model,
    )
    logger.debug(f"Route {inbound.path!r} -> {outbound.endpoint}")
    return outbound
