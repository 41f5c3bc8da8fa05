"""
Client HTTPX vers l'API Puter.

Un seul AsyncClient (pool de connexions) pour toute la durée de vie
de l'application, fermé au shutdown. Pas de retry: chaque appel
sortant est envoyé une seule fois.
"""
from typing import Optional

import httpx

from ..core.constants import PUTER_API_BASE_URL
from ..core.models import OutboundRequest


class ProxyClient:
    """
    Client HTTP pour le proxy vers Puter.

    Gère:
    - Base URL de l'API
    - Timeout optionnel (None = pas de timeout côté proxy)
    - Gestion des connexions
    """

    def __init__(
        self,
        base_url: str = PUTER_API_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            limits=httpx.Limits(
                max_keepalive_connections=20,
                max_connections=50
            )
        )

    async def __aenter__(self) -> "ProxyClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def build_request(self, outbound: OutboundRequest) -> httpx.Request:
        """Construit la requête HTTPX (POST JSON + Bearer)."""
        return self._client.build_request(
            "POST",
            outbound.endpoint,
            headers=outbound.headers,
            json=outbound.payload,
        )

    async def send(self, outbound: OutboundRequest) -> httpx.Response:
        """
        Envoie l'appel sortant et retourne la réponse non lue.

        Le body n'est pas lu: l'appelant choisit entre `aread()` (JSON)
        et l'itération chunk par chunk (stream), puis ferme la réponse.
        """
        request = self.build_request(outbound)
        return await self._client.send(request, stream=True)

    async def aclose(self) -> None:
        """Ferme le pool de connexions."""
        await self._client.aclose()


def create_proxy_client(
    base_url: str = PUTER_API_BASE_URL,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> ProxyClient:
    """
    Crée un client proxy.

    Args:
        base_url: URL de base de l'API Puter
        timeout: Timeout en secondes (None = désactivé)
        transport: Transport HTTPX (tests: httpx.MockTransport)

    Returns:
        Instance de ProxyClient
    """
    return ProxyClient(base_url=base_url, timeout=timeout, transport=transport)
