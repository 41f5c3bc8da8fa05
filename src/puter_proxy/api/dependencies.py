"""
Dépendances FastAPI: accès aux objets construits par create_app().
"""
from fastapi import Request

from ..config.settings import Settings
from ..proxy.client import ProxyClient


def get_settings(request: Request) -> Settings:
    """Settings injectés à la construction de l'application."""
    return request.app.state.settings


def get_proxy_client(request: Request) -> ProxyClient:
    """Client Puter partagé de l'application."""
    return request.app.state.proxy_client
