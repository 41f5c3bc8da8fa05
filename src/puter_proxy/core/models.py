"""
Dataclasses métier pour Puter Proxy.

Une route est une variante taggée par catégorie: le parsing du chemin
produit exactement une de ces classes, et la construction de la requête
sortante dispatche sur le type (voir proxy/router.py).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Union

Category = Literal["fs", "ai", "kv", "chat", "completions"]


@dataclass(frozen=True)
class FsRoute:
    """Opérations fichiers: la méthode est une sous-route littérale."""
    method: str


@dataclass(frozen=True)
class AiRoute:
    """Génération d'image ou chat via un driver Puter."""
    method: str


@dataclass(frozen=True)
class KvRoute:
    """Key-value store: la méthode est le nom de méthode du driver."""
    method: str


@dataclass(frozen=True)
class ChatRoute:
    """Compatibilité OpenAI (`chat/completions`), la méthode est ignorée."""
    alias: str = "chat"


Route = Union[FsRoute, AiRoute, KvRoute, ChatRoute]


@dataclass(frozen=True)
class InboundRequest:
    """Requête reçue par le proxy."""
    method: str
    path: str
    body: Any = field(default_factory=dict)

    @property
    def stream_requested(self) -> bool:
        """Vrai si le client demande un stream (`body.stream`)."""
        return isinstance(self.body, dict) and bool(self.body.get("stream"))


@dataclass(frozen=True)
class OutboundRequest:
    """Appel sortant vers Puter, construit pour une seule requête."""
    endpoint: str
    payload: Any
    credential: str = field(repr=False)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.credential}",
            "Content-Type": "application/json",
        }
