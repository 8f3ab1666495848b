"""Configuration container shared by the resolver, executor and fetcher."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .chains import ChainDescriptor, ChainOverride, normalise_override
from .client import DEFAULT_REQUEST_TIMEOUT, ChainClient, create_chain_client
from .names import DEFAULT_NAME_RESOLVERS, NameResolver

ClientFactory = Callable[[ChainDescriptor, float], ChainClient]


@dataclass(frozen=True)
class ResolverOptions:
    """Options accepted by ``parse_url``, ``fetch_parsed_url`` and ``fetch_url``.

    ``chains`` are consulted before the built-in registry. ``name_resolvers``
    defaults to ENS only. ``client_factory`` builds a chain client for a
    descriptor and is the seam tests use to avoid network access.
    """

    chains: tuple[ChainOverride, ...] = field(default_factory=tuple)
    name_resolvers: tuple[NameResolver, ...] | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    client_factory: ClientFactory = create_chain_client

    def with_normalised_chains(self) -> ResolverOptions:
        """Return a copy whose chain overrides are all :class:`ChainDescriptor`."""

        return ResolverOptions(
            chains=tuple(normalise_override(entry) for entry in self.chains),
            name_resolvers=self.name_resolvers,
            request_timeout=self.request_timeout,
            client_factory=self.client_factory,
        )

    def resolvers(self) -> Sequence[NameResolver]:
        if self.name_resolvers is not None:
            return self.name_resolvers
        return DEFAULT_NAME_RESOLVERS

    def client_for(self, chain: ChainDescriptor) -> ChainClient:
        return self.client_factory(chain, self.request_timeout)
