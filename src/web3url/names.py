"""Name resolution for web3:// hostnames that are not plain addresses."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Protocol

from ens import AsyncENS
from ens.exceptions import ResolverNotFound, UnsupportedFunction

from .chains import ChainDescriptor, ChainOverride, find_chain_by_short_name
from .client import ChainClient
from .exceptions import UnresolvableNameError
from .types import NameResolutionResult

logger = logging.getLogger(__name__)

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
# EIP-3770 style "<shortName>:<address>", as stored in the contentcontract text record
_CHAIN_SPECIFIC_ADDRESS_RE = re.compile(
    r"^(?:(?P<short_name>[a-zA-Z0-9-]+):)?(?P<address>0x[0-9a-fA-F]{40})$"
)

ENS_CHAIN_IDS = frozenset({1, 17000, 11155111})
CONTENT_CONTRACT_TEXT_KEY = "contentcontract"


class NameResolver(Protocol):
    """A naming service able to turn hostnames into contract addresses."""

    def is_supported(self, hostname: str, chain: ChainDescriptor) -> bool: ...

    async def resolve(
        self,
        hostname: str,
        client: ChainClient,
        chains: Iterable[ChainOverride] = (),
    ) -> NameResolutionResult: ...


def parse_content_contract(
    value: str, chains: Iterable[ChainOverride] = ()
) -> NameResolutionResult:
    """Parse a ``contentcontract`` record: ``0x…`` or ``<shortName>:0x…``."""

    match = _CHAIN_SPECIFIC_ADDRESS_RE.match(value.strip())
    if match is None:
        raise UnresolvableNameError("Invalid contentcontract record", details={"record": value})

    short_name = match.group("short_name")
    if short_name is None:
        return NameResolutionResult(address=match.group("address"))

    chain = find_chain_by_short_name(short_name, chains)
    return NameResolutionResult(address=match.group("address"), chain_id=chain.chain_id)


class ENSResolver:
    """Resolve ``*.eth`` names through the ENS registry.

    The ``contentcontract`` text record wins over the address record, which
    lets a name point at a contract living on another chain.
    """

    tld = ".eth"

    def __init__(self, chain_ids: Iterable[int] = ENS_CHAIN_IDS) -> None:
        self.chain_ids = frozenset(chain_ids)

    def is_supported(self, hostname: str, chain: ChainDescriptor) -> bool:
        return hostname.lower().endswith(self.tld) and chain.chain_id in self.chain_ids

    async def resolve(
        self,
        hostname: str,
        client: ChainClient,
        chains: Iterable[ChainOverride] = (),
    ) -> NameResolutionResult:
        web3 = getattr(client, "web3", None)
        if web3 is None:
            raise UnresolvableNameError(
                "ENS resolution requires a web3 backed chain client", name=hostname
            )
        ns = AsyncENS.from_web3(web3)

        try:
            record = await ns.get_text(hostname, CONTENT_CONTRACT_TEXT_KEY)
        except (ResolverNotFound, UnsupportedFunction) as exc:
            # A resolver without a text profile has no record
            logger.debug("ENS %s has no readable contentcontract record: %s", hostname, exc)
            record = None
        if record:
            logger.debug("ENS %s has contentcontract record %s", hostname, record)
            return parse_content_contract(record, chains)

        address = await ns.address(hostname)
        if address is None:
            raise UnresolvableNameError(f"ENS name {hostname} has no address", name=hostname)
        return NameResolutionResult(address=str(address))


DEFAULT_NAME_RESOLVERS: tuple[NameResolver, ...] = (ENSResolver(),)


def find_name_resolver(
    hostname: str, chain: ChainDescriptor, resolvers: Sequence[NameResolver]
) -> NameResolver | None:
    for resolver in resolvers:
        if resolver.is_supported(hostname, chain):
            return resolver
    return None


def is_supported_domain_name(
    hostname: str,
    chain: ChainDescriptor,
    resolvers: Sequence[NameResolver] = DEFAULT_NAME_RESOLVERS,
) -> bool:
    return find_name_resolver(hostname, chain, resolvers) is not None


async def resolve_domain_name(
    hostname: str,
    client: ChainClient,
    resolvers: Sequence[NameResolver] = DEFAULT_NAME_RESOLVERS,
    chains: Iterable[ChainOverride] = (),
) -> NameResolutionResult:
    """Resolve ``hostname`` on the client's chain with the first supporting resolver."""

    resolver = find_name_resolver(hostname, client.chain, resolvers)
    if resolver is None:
        raise UnresolvableNameError(
            f"Unresolvable domain name : {hostname} : no supported resolvers found in this chain",
            name=hostname,
            details={"chain_id": client.chain.chain_id},
        )
    return await resolver.resolve(hostname, client, chains)
