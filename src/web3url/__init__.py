"""web3url - resolve and fetch web3:// URLs.

A web3:// URL addresses a smart contract on an EVM chain. This library
parses such URLs, resolves names and resolve modes on chain, performs the
read-only contract call and returns the output with its MIME type.
"""

from .chains import DEFAULT_CHAINS, ChainDescriptor, find_chain_by_short_name, resolve_chain
from .client import ChainClient, Web3ChainClient, create_chain_client
from .config import ResolverOptions
from .exceptions import (
    InvalidArgumentError,
    InvalidIntentError,
    MalformedUrlError,
    NotAContractError,
    UnknownChainError,
    UnresolvableNameError,
    UnsupportedProtocolError,
    UnsupportedResolveModeError,
    Web3URLError,
)
from .executor import fetch_parsed_url
from .fetcher import Web3URLClient, fetch_url
from .names import ENSResolver, NameResolver
from .resolver import parse_url
from .types import (
    CallParameters,
    ContractCallMode,
    FetchResult,
    NameResolution,
    NameResolutionResult,
    ProbeResult,
    ResolvedCallIntent,
    ResolveMode,
)

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "parse_url",
    "fetch_parsed_url",
    "fetch_url",
    "Web3URLClient",
    "ResolverOptions",
    # Chains and clients
    "ChainDescriptor",
    "DEFAULT_CHAINS",
    "resolve_chain",
    "find_chain_by_short_name",
    "ChainClient",
    "Web3ChainClient",
    "create_chain_client",
    # Name resolution
    "NameResolver",
    "ENSResolver",
    # Types and enums
    "ResolveMode",
    "ContractCallMode",
    "CallParameters",
    "NameResolution",
    "NameResolutionResult",
    "ResolvedCallIntent",
    "FetchResult",
    "ProbeResult",
    # Exceptions
    "Web3URLError",
    "MalformedUrlError",
    "UnsupportedProtocolError",
    "UnknownChainError",
    "UnresolvableNameError",
    "UnsupportedResolveModeError",
    "NotAContractError",
    "InvalidArgumentError",
    "InvalidIntentError",
]
