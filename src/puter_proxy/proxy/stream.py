"""
Relais du streaming Puter: NDJSON -> text/event-stream.

Un chunk à la fois: chaque chunk reçu est décodé en texte et réécrit
`data: <chunk>\n\n`, sans buffering. Si le client se déconnecte, le
générateur est fermé et la réponse Puter avec lui.
"""
from typing import AsyncGenerator

import httpx

from ..core.constants import NDJSON_MARKER


def is_ndjson_response(response: httpx.Response) -> bool:
    """Vrai si Puter répond en NDJSON (content-type contenant `ndjson`)."""
    return NDJSON_MARKER in response.headers.get("content-type", "")


def format_sse_event(chunk: str) -> str:
    """Encadre un chunk texte en événement SSE."""
    return f"data: {chunk}\n\n"


async def ndjson_to_sse(response: httpx.Response) -> AsyncGenerator[str, None]:
    """
    Générateur SSE à partir d'une réponse Puter en streaming.

    Les erreurs réseau en cours de stream sont loggées et terminent le
    stream proprement: les headers sont déjà partis, on ne peut plus
    renvoyer de 500.

    Args:
        response: Réponse HTTPX non lue

    Yields:
        Événements SSE, dans l'ordre de réception
    """
    chunk_count = 0
    try:
        async for text in response.aiter_text():
            chunk_count += 1
            yield format_sse_event(text)
    except httpx.HTTPError as e:
        print(f"🔴 [STREAM] Stream Puter interrompu après {chunk_count} chunk(s): {e}")
    finally:
        await response.aclose()
