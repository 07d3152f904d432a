"""Remote client construction based on runtime settings."""

from __future__ import annotations

from privnet.clients.base import PrivateNetworkClient
from privnet.clients.contabo import ContaboPrivateNetworkClient
from privnet.config import AppSettings


def create_network_client(settings: AppSettings) -> PrivateNetworkClient:
    token = settings.api_token.strip()
    if not token:
        raise ValueError("PRIVNET_API_TOKEN (api.token) is required")
    base_url = settings.api_base_url.strip()
    if not base_url:
        raise ValueError("api.base_url is required")
    return ContaboPrivateNetworkClient(
        base_url=base_url,
        api_token=token,
        timeout_seconds=settings.api_timeout_seconds,
    )
