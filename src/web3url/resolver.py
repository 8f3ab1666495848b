"""web3:// URL resolution pipeline.

Turns a URL string into a :class:`~web3url.types.ResolvedCallIntent`:

1. syntactic parse of ``web3://<hostname>[:<chainId>][/<path>]``
2. chain selection (chain 1 unless given)
3. address or name resolution, possibly switching chain
4. ``resolveMode()`` probe on the contract
5. auto or manual parsing of the path
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import cast

from hexbytes import HexBytes

from .chains import ChainDescriptor, resolve_chain
from .client import ChainClient, function_abi
from .config import ResolverOptions
from .exceptions import (
    MalformedUrlError,
    UnresolvableNameError,
    UnsupportedProtocolError,
    UnsupportedResolveModeError,
)
from .modes import parse_auto_url, parse_manual_url
from .names import find_name_resolver
from .types import (
    DEFAULT_CHAIN_ID,
    NameResolution,
    ProbeResult,
    ResolvedCallIntent,
    ResolveMode,
)

logger = logging.getLogger(__name__)

WEB3_PROTOCOL = "web3"

# A chain id segment that is not a positive integer without leading zero is
# accepted and ignored, so the URL falls back to the default chain.
URL_RE = re.compile(
    r"^(?P<protocol>[^:]+)://(?P<hostname>[^:/]+)"
    r"(?::(?:(?P<chain_id>[1-9][0-9]*)|[^/]*))?"
    r"(?P<path>/.*)?$",
    re.DOTALL,
)
HOSTNAME_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}")

RESOLVE_MODE_FUNCTION = "resolveMode"
RESOLVE_MODE_ABI = (function_abi(RESOLVE_MODE_FUNCTION, [], ["bytes32"]),)
_RESOLVE_MODES = {
    "": ResolveMode.AUTO,
    "auto": ResolveMode.AUTO,
    "manual": ResolveMode.MANUAL,
}


@dataclass(frozen=True)
class UrlParts:
    """Syntactic components of a web3:// URL."""

    protocol: str
    hostname: str
    chain_id: int | None
    path: str | None


@dataclass(frozen=True)
class ChainContext:
    """The chain the pipeline currently talks to, and a client for it."""

    chain: ChainDescriptor
    client: ChainClient


def split_url(url: str) -> UrlParts:
    """Match ``url`` against the web3:// grammar."""

    match = URL_RE.match(url)
    if match is None:
        raise MalformedUrlError("Failed basic parsing of the URL", url=url)

    protocol = match.group("protocol")
    if protocol != WEB3_PROTOCOL:
        raise UnsupportedProtocolError("Bad protocol name", protocol=protocol)

    raw_chain_id = match.group("chain_id")
    return UrlParts(
        protocol=protocol,
        hostname=match.group("hostname"),
        chain_id=int(raw_chain_id) if raw_chain_id is not None else None,
        path=match.group("path"),
    )


def chain_context(chain_id: int, options: ResolverOptions) -> ChainContext:
    chain = resolve_chain(chain_id, options.chains)
    return ChainContext(chain=chain, client=options.client_for(chain))


async def resolve_contract_address(
    intent: ResolvedCallIntent,
    hostname: str,
    context: ChainContext,
    options: ResolverOptions,
) -> tuple[ResolvedCallIntent, ChainContext]:
    """Set the contract address, resolving ``hostname`` as a name when needed.

    Returns the updated intent together with the chain context later stages
    must use, which differs from ``context`` when the name points at a
    contract on another chain.
    """

    address_match = HOSTNAME_ADDRESS_RE.match(hostname)
    if address_match is not None:
        return replace(intent, contract_address=address_match.group(0)), context

    resolver = find_name_resolver(hostname, context.chain, options.resolvers())
    if resolver is None:
        raise UnresolvableNameError(
            f"Unresolvable domain name : {hostname} : no supported resolvers found in this chain",
            name=hostname,
            details={"chain_id": context.chain.chain_id},
        )

    intent = replace(
        intent,
        name_resolution=NameResolution(chain_id=context.chain.chain_id, resolved_name=hostname),
    )

    try:
        resolution = await resolver.resolve(hostname, context.client, options.chains)
    except Exception as exc:
        raise UnresolvableNameError(
            f"Failed to resolve domain name {hostname} : {exc}",
            name=hostname,
            details={"chain_id": context.chain.chain_id, "error": str(exc)},
        ) from exc

    intent = replace(intent, contract_address=resolution.address)
    logger.debug("Resolved %s to %s", hostname, resolution.address)

    if resolution.chain_id is not None:
        if resolution.chain_id != context.chain.chain_id:
            logger.info(
                "Name %s points to chain %s, switching from chain %s",
                hostname,
                resolution.chain_id,
                context.chain.chain_id,
            )
        context = chain_context(resolution.chain_id, options)
        intent = replace(intent, chain_id=context.chain.chain_id)

    return intent, context


async def probe_resolve_mode(client: ChainClient, address: str) -> ProbeResult[bytes]:
    """Read ``resolveMode()`` from the contract without raising."""

    try:
        raw = await client.read_contract(address, RESOLVE_MODE_ABI, RESOLVE_MODE_FUNCTION)
        value = bytes(HexBytes(raw))
    except Exception as exc:
        logger.debug("resolveMode() call on %s failed: %s", address, exc)
        return ProbeResult(error=exc)
    return ProbeResult(value=value)


def resolve_mode_from_probe(probe: ProbeResult[bytes]) -> ResolveMode:
    """Map the probed ``bytes32`` to a mode; a failed probe means auto."""

    if not probe.ok:
        return ResolveMode.AUTO

    mode = probe.value_or(b"").decode("utf-8", errors="replace").replace("\x00", "")
    try:
        return _RESOLVE_MODES[mode]
    except KeyError:
        raise UnsupportedResolveModeError(
            f"web3 resolveMode '{mode}' is not supported", mode=mode
        ) from None


async def parse_url(url: str, options: ResolverOptions | None = None) -> ResolvedCallIntent:
    """Parse a web3:// URL into the components needed to make the call.

    May perform RPC calls (name resolution, ``resolveMode()`` and whatever the
    auto-mode parser needs).
    """

    options = (options or ResolverOptions()).with_normalised_chains()
    parts = split_url(url)

    context = chain_context(
        parts.chain_id if parts.chain_id is not None else DEFAULT_CHAIN_ID, options
    )
    intent = ResolvedCallIntent(chain_id=context.chain.chain_id)

    intent, context = await resolve_contract_address(intent, parts.hostname, context, options)
    address = cast(str, intent.contract_address)

    probe = await probe_resolve_mode(context.client, address)
    intent = replace(intent, mode=resolve_mode_from_probe(probe))
    logger.debug("Contract %s uses %s mode", intent.contract_address, intent.mode.value)

    if intent.mode == ResolveMode.MANUAL:
        params = parse_manual_url(parts.path)
    else:
        params = await parse_auto_url(
            parts.path, context.client, options.resolvers(), options.chains
        )

    return intent.with_call_parameters(params)
