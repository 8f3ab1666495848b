"""Entry points combining URL resolution and execution."""

from __future__ import annotations

import logging

from .chains import ChainDescriptor
from .client import ChainClient
from .config import ResolverOptions
from .executor import fetch_parsed_url
from .resolver import parse_url
from .types import FetchResult, ResolvedCallIntent

logger = logging.getLogger(__name__)


async def fetch_url(url: str, options: ResolverOptions | None = None) -> FetchResult:
    """Resolve and execute a web3:// URL."""

    parsed_url = await parse_url(url, options)
    return await fetch_parsed_url(parsed_url, options)


class Web3URLClient:
    """Reusable facade over :func:`parse_url`, :func:`fetch_parsed_url` and :func:`fetch_url`.

    Chain clients are cached per chain id so repeated fetches reuse the same
    HTTP provider. Results themselves are never cached.
    """

    def __init__(self, options: ResolverOptions | None = None):
        base = options or ResolverOptions()
        self._clients: dict[int, ChainClient] = {}
        self._factory = base.client_factory
        self.options = ResolverOptions(
            chains=base.chains,
            name_resolvers=base.name_resolvers,
            request_timeout=base.request_timeout,
            client_factory=self._cached_client,
        )

    def _cached_client(self, chain: ChainDescriptor, request_timeout: float) -> ChainClient:
        client = self._clients.get(chain.chain_id)
        if client is None or client.chain != chain:
            logger.debug("Creating chain client for chain %s", chain.chain_id)
            client = self._factory(chain, request_timeout)
            self._clients[chain.chain_id] = client
        return client

    def clear_cache(self) -> None:
        self._clients.clear()

    async def parse_url(self, url: str) -> ResolvedCallIntent:
        return await parse_url(url, self.options)

    async def fetch_parsed_url(self, parsed_url: ResolvedCallIntent) -> FetchResult:
        return await fetch_parsed_url(parsed_url, self.options)

    async def fetch_url(self, url: str) -> FetchResult:
        return await fetch_url(url, self.options)
