"""
Dataclasses pour la configuration.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..core.constants import PUTER_API_BASE_URL, DEFAULT_CHAT_MODEL, MAX_BODY_SIZE


@dataclass(frozen=True)
class Settings:
    """
    Configuration globale de l'application.

    Chargée une seule fois au démarrage puis passée à `create_app()`;
    les routes ne lisent jamais l'environnement directement.
    """
    puter_token: str = field(default="", repr=False)
    base_url: str = PUTER_API_BASE_URL
    max_body_size: int = MAX_BODY_SIZE
    default_chat_model: str = DEFAULT_CHAT_MODEL
    timeout: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Crée une instance depuis la section `[puter]` du TOML."""
        timeout = data.get("timeout")
        return cls(
            puter_token=data.get("token", "") or "",
            base_url=(data.get("base_url") or PUTER_API_BASE_URL).rstrip("/"),
            max_body_size=int(data.get("max_body_size", MAX_BODY_SIZE)),
            default_chat_model=data.get("default_chat_model", DEFAULT_CHAT_MODEL),
            timeout=float(timeout) if timeout else None,
        )

    @property
    def token_configured(self) -> bool:
        return bool(self.puter_token)
