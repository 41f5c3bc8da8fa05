"""
Construction des payloads Puter (enveloppe driver, compatibilité OpenAI).
"""
from typing import Any, Dict, Optional

from ..core.constants import INTERFACE_CHAT_COMPLETION, DEFAULT_CHAT_MODEL


def build_driver_call(
    interface: str,
    method: str,
    args: Any,
    driver: Optional[str] = None
) -> Dict[str, Any]:
    """
    Construit l'enveloppe d'appel driver Puter.

    Args:
        interface: Interface Puter (ex: puter-kvstore)
        method: Méthode du driver
        args: Arguments transmis tels quels
        driver: Nom du driver (absent pour le kvstore)

    Returns:
        Payload pour /drivers/call
    """
    payload = {"interface": interface}
    if driver is not None:
        payload["driver"] = driver
    payload["method"] = method
    payload["args"] = args
    return payload


def build_chat_completion_args(
    body: Any,
    default_model: str = DEFAULT_CHAT_MODEL
) -> Dict[str, Any]:
    """
    Convertit un body OpenAI `chat/completions` en args du driver ai-chat.

    Seuls messages, model et stream sont conservés.
    Un model ou stream absent (ou falsy) prend sa valeur par défaut.
    """
    body = body if isinstance(body, dict) else {}

    args = {}
    if body.get("messages") is not None:
        args["messages"] = body["messages"]
    args["model"] = body.get("model") or default_model
    args["stream"] = body.get("stream") or False
    return args


def build_chat_completion_call(
    body: Any,
    default_model: str = DEFAULT_CHAT_MODEL
) -> Dict[str, Any]:
    """Payload /drivers/call pour une requête OpenAI-compatible."""
    return build_driver_call(
        INTERFACE_CHAT_COMPLETION,
        "complete",
        build_chat_completion_args(body, default_model),
        driver="ai-chat",
    )
