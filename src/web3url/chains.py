"""Chain registry: map numeric chain ids to RPC connection parameters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any, Union

from .exceptions import UnknownChainError, Web3URLError


@dataclass(frozen=True)
class ChainDescriptor:
    """Network parameters needed to build a chain client."""

    chain_id: int
    rpc_url: str | None = None
    name: str | None = None
    short_name: str | None = None


ChainOverride = Union[ChainDescriptor, Mapping[str, Any]]


DEFAULT_CHAINS: tuple[ChainDescriptor, ...] = (
    ChainDescriptor(1, "https://ethereum-rpc.publicnode.com", "Ethereum Mainnet", "eth"),
    ChainDescriptor(10, "https://mainnet.optimism.io", "OP Mainnet", "oeth"),
    ChainDescriptor(137, "https://polygon-rpc.com", "Polygon Mainnet", "matic"),
    ChainDescriptor(333, "https://mainnet.web3q.io:8545", "Web3Q Mainnet", "w3q"),
    ChainDescriptor(3334, "https://galileo.web3q.io:8545", "Web3Q Galileo", "w3q-g"),
    ChainDescriptor(8453, "https://mainnet.base.org", "Base", "base"),
    ChainDescriptor(17000, "https://ethereum-holesky-rpc.publicnode.com", "Holesky", "holesky"),
    ChainDescriptor(42161, "https://arb1.arbitrum.io/rpc", "Arbitrum One", "arb1"),
    ChainDescriptor(11155111, "https://ethereum-sepolia-rpc.publicnode.com", "Sepolia", "sep"),
)

_DEFAULTS_BY_ID = {chain.chain_id: chain for chain in DEFAULT_CHAINS}


def normalise_override(entry: ChainOverride) -> ChainDescriptor:
    """Coerce a caller supplied override into a :class:`ChainDescriptor`.

    Mappings may use either snake case keys (``chain_id``, ``rpc_url``) or the
    shorter ``id``/``rpc`` spellings; ``rpcUrls`` lists are accepted and the
    first entry is used.
    """

    if isinstance(entry, ChainDescriptor):
        return entry

    if not isinstance(entry, Mapping):
        raise Web3URLError(
            "Chain override must be a ChainDescriptor or a mapping",
            details={"override": repr(entry)},
        )

    raw_id = entry.get("chain_id", entry.get("id", entry.get("chainId")))
    try:
        chain_id = int(raw_id)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise UnknownChainError(
            "Chain override has no usable chain id", details={"override": dict(entry)}
        ) from exc

    rpc_url = entry.get("rpc_url") or entry.get("rpc")
    rpc_urls = entry.get("rpcUrls") or entry.get("rpc_urls")
    if rpc_url is None and rpc_urls:
        rpc_url = rpc_urls[0] if not isinstance(rpc_urls, str) else rpc_urls

    return ChainDescriptor(
        chain_id=chain_id,
        rpc_url=rpc_url,
        name=entry.get("name"),
        short_name=entry.get("short_name", entry.get("shortName")),
    )


def _merge(base: ChainDescriptor | None, override: ChainDescriptor) -> ChainDescriptor:
    if base is None:
        return override
    return replace(
        base,
        rpc_url=override.rpc_url or base.rpc_url,
        name=override.name or base.name,
        short_name=override.short_name or base.short_name,
    )


def resolve_chain(chain_id: int, overrides: Iterable[ChainOverride] = ()) -> ChainDescriptor:
    """Return the descriptor for ``chain_id``; overrides take precedence over defaults."""

    builtin = _DEFAULTS_BY_ID.get(chain_id)
    for entry in overrides:
        override = normalise_override(entry)
        if override.chain_id == chain_id:
            chain = _merge(builtin, override)
            break
    else:
        chain = builtin

    if chain is None:
        raise UnknownChainError(f"No chain found for id {chain_id}", chain_id=chain_id)
    if not chain.rpc_url:
        raise UnknownChainError(
            f"Chain {chain_id} has no RPC endpoint configured", chain_id=chain_id
        )
    return chain


def find_chain_by_short_name(
    short_name: str, overrides: Iterable[ChainOverride] = ()
) -> ChainDescriptor:
    """Look up a chain by its short name (e.g. ``w3q-g``), overrides first."""

    wanted = short_name.strip().lower()
    candidates = [normalise_override(entry) for entry in overrides]
    for chain in (*candidates, *DEFAULT_CHAINS):
        if chain.short_name and chain.short_name.lower() == wanted:
            return resolve_chain(chain.chain_id, candidates)

    raise UnknownChainError(f"No chain found for short name {short_name!r}", short_name=short_name)
