"""
Route proxy principale /api/proxy?path=<catégorie>/<méthode>.
"""
import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse, JSONResponse

from ...config.settings import Settings
from ...core.constants import SSE_HEADERS
from ...core.exceptions import (
    PuterProxyError,
    MethodNotAllowedError,
    ConfigurationError,
    InvalidBodyError,
    UpstreamError,
)
from ...core.models import InboundRequest, OutboundRequest
from ...proxy.client import ProxyClient
from ...proxy.router import translate
from ...proxy.stream import is_ndjson_response, ndjson_to_sse
from ..dependencies import get_settings, get_proxy_client

router = APIRouter()

# Les autres verbes doivent atteindre la route pour recevoir un 405 JSON
ACCEPTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def _error_response(error: PuterProxyError) -> JSONResponse:
    return JSONResponse(content=error.to_response(), status_code=error.status_code)


async def read_json_body(request: Request, max_body_size: int) -> Any:
    """
    Lit le body JSON entrant.

    Returns:
        Body décodé ({} si vide)

    Raises:
        InvalidBodyError: Body trop volumineux (413) ou JSON invalide (400)
    """
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_body_size:
        raise InvalidBodyError("Payload too large", status_code=413)

    # Lecture chunk par chunk: sans Content-Length (chunked), on s'arrête
    # dès que la limite est dépassée
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_body_size:
            raise InvalidBodyError("Payload too large", status_code=413)
        chunks.append(chunk)

    raw = b"".join(chunks)
    if not raw.strip():
        return {}

    try:
        body = json.loads(raw)
    except ValueError as e:
        raise InvalidBodyError() from e
    return {} if body is None else body


async def relay(
    client: ProxyClient,
    outbound: OutboundRequest,
    stream_requested: bool
):
    """
    Envoie l'appel sortant et relaie la réponse Puter.

    - stream demandé + réponse NDJSON: StreamingResponse SSE
    - sinon: status + JSON Puter tels quels

    Raises:
        UpstreamError: Échec réseau ou body Puter non JSON
    """
    try:
        response = await client.send(outbound)
    except Exception as e:
        raise UpstreamError(str(e), endpoint=outbound.endpoint) from e

    if stream_requested and is_ndjson_response(response):
        print(f"📡 [PROXY] Stream NDJSON -> SSE depuis {outbound.endpoint}")
        return StreamingResponse(
            ndjson_to_sse(response),
            headers=SSE_HEADERS,
            media_type="text/event-stream"
        )

    try:
        await response.aread()
        data = response.json()
    except Exception as e:
        raise UpstreamError(str(e), endpoint=outbound.endpoint) from e
    finally:
        await response.aclose()

    if response.status_code >= 400:
        print(f"❌ [PROXY] Puter {outbound.endpoint} -> {response.status_code}")
    return JSONResponse(content=data, status_code=response.status_code)


@router.api_route("/api/proxy", methods=ACCEPTED_METHODS)
async def proxy_puter(
    request: Request,
    path: str = "",
    settings: Settings = Depends(get_settings),
    client: ProxyClient = Depends(get_proxy_client),
):
    """
    Proxy vers l'API Puter avec:
    - Injection du token Bearer
    - Mapping catégorie/méthode -> endpoint + payload
    - Relais SSE des réponses NDJSON en streaming
    """
    try:
        if request.method != "POST":
            raise MethodNotAllowedError(request.method)

        if not settings.token_configured:
            raise ConfigurationError("Puter token not configured", config_key="PUTER_TOKEN")

        body = await read_json_body(request, settings.max_body_size)
        inbound = InboundRequest(method=request.method, path=path, body=body)
        outbound = translate(inbound, settings)
    except ConfigurationError as e:
        print(f"🚫 [PROXY] {e}")
        return _error_response(e)
    except PuterProxyError as e:
        return _error_response(e)

    try:
        return await relay(client, outbound, inbound.stream_requested)
    except UpstreamError as e:
        print(f"🔴 [PROXY] Erreur proxy vers {outbound.endpoint}: {e.reason}")
        return _error_response(e)
