"""
HTTP Client Manager for LLM Providers

Pools one httpx AsyncClient per provider for the DashScope chat clients.
A pooled client is rebuilt when the configured timeout changes, so a new
LLM_TIMEOUT takes effect without restarting the service.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Dict, List, Optional, Tuple
import asyncio
import logging

import httpx

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 10.0
POOL_LIMITS = httpx.Limits(
    max_connections=100,
    max_keepalive_connections=20,
    keepalive_expiry=30.0
)


class HTTPXClientManager:
    """
    Shared httpx AsyncClient instances, one per provider.

    HTTP/2 is enabled so concurrent assistant exchanges multiplex over the
    same connection.
    """

    _instance: Optional['HTTPXClientManager'] = None

    def __init__(self):
        self._clients: Dict[str, Tuple[httpx.AsyncClient, float]] = {}
        self._lock = asyncio.Lock()

    @classmethod
    def get_instance(cls) -> 'HTTPXClientManager':
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def providers(self) -> List[str]:
        """Providers with an open pooled client."""
        return [name for name, (client, _) in self._clients.items() if not client.is_closed]

    async def get_client(self, provider: str, timeout: float = 60.0) -> httpx.AsyncClient:
        """
        Pooled client for ``provider`` with the given read timeout.

        Args:
            provider: Provider identifier (e.g., 'dashscope')
            timeout: Read timeout in seconds

        Returns:
            Shared httpx.AsyncClient instance
        """
        async with self._lock:
            pooled = self._clients.get(provider)
            if pooled is not None:
                client, pooled_timeout = pooled
                if not client.is_closed and pooled_timeout == timeout:
                    return client
                if not client.is_closed:
                    logger.debug(
                        '[HTTPXClientManager] Timeout for %s changed %.0fs -> %.0fs, rebuilding client',
                        provider, pooled_timeout, timeout
                    )
                    await client.aclose()

            client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout, connect=CONNECT_TIMEOUT),
                http2=True,
                limits=POOL_LIMITS
            )
            self._clients[provider] = (client, timeout)
            logger.debug('[HTTPXClientManager] Created client for %s', provider)
            return client

    async def close_all(self) -> None:
        """Close every pooled client. Called on app shutdown."""
        async with self._lock:
            for provider, (client, _) in self._clients.items():
                if not client.is_closed:
                    await client.aclose()
                    logger.debug('[HTTPXClientManager] Closed client for %s', provider)
            self._clients.clear()


def get_httpx_manager() -> HTTPXClientManager:
    """Get the global httpx client manager."""
    return HTTPXClientManager.get_instance()


async def close_httpx_clients() -> None:
    """Close all httpx clients if the manager was ever created."""
    manager = HTTPXClientManager._instance  # pylint: disable=protected-access
    if manager is not None:
        await manager.close_all()
