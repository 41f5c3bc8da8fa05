"""
Puter Proxy - Application FastAPI Factory.
Relais HTTP vers l'API Puter avec injection du token et relais SSE.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config.loader import load_settings
from .config.settings import Settings
from .core.exceptions import MethodNotAllowedError
from .proxy.client import ProxyClient, create_proxy_client
from .api.router import api_router


def create_app(
    settings: Optional[Settings] = None,
    proxy_client: Optional[ProxyClient] = None
) -> FastAPI:
    """
    Factory pour créer l'application FastAPI.

    Args:
        settings: Configuration (défaut: chargée depuis env + config.toml)
        proxy_client: Client Puter (défaut: construit depuis settings)

    Returns:
        Instance configurée de FastAPI
    """
    settings = settings if settings is not None else load_settings()
    if proxy_client is None:
        proxy_client = create_proxy_client(
            base_url=settings.base_url,
            timeout=settings.timeout
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Gestion du cycle de vie de l'application."""
        _startup(app)
        yield
        await _shutdown(app)

    app = FastAPI(
        title="Puter Proxy",
        description="Relais HTTP vers l'API Puter (fs, ai, kv, chat/completions)",
        version=__version__,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.proxy_client = proxy_client

    # Tout verbe non accepté (TRACE, PROPFIND...) reçoit le 405 JSON du proxy
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)

    app.include_router(api_router)

    return app


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    """405 au format du proxy, les autres erreurs HTTP au format FastAPI."""
    if exc.status_code == 405:
        error = MethodNotAllowedError(request.method)
        return JSONResponse(
            content=error.to_response(),
            status_code=error.status_code,
            headers=exc.headers
        )
    return await http_exception_handler(request, exc)


def _startup(app: FastAPI):
    """Initialisation au démarrage."""
    settings: Settings = app.state.settings
    print("🚀 Démarrage du Puter Proxy...")
    print(f"✅ API Puter: {settings.base_url}")
    if not settings.token_configured:
        # Pas fatal au démarrage: chaque requête recevra un 500 explicite
        print("⚠️ PUTER_TOKEN absent: les requêtes proxy seront refusées")


async def _shutdown(app: FastAPI):
    """Arrêt de l'application."""
    print("\n👋 Arrêt du serveur...")
    await app.state.proxy_client.aclose()
    print("✅ Serveur arrêté proprement")


# Crée l'application pour uvicorn
app = create_app()
