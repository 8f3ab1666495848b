"""Execution of resolved web3:// call intents."""

from __future__ import annotations

import logging
from typing import Any, cast

from eth_abi import decode as abi_decode

from .chains import resolve_chain
from .client import ChainClient, function_abi
from .config import ResolverOptions
from .exceptions import NotAContractError
from .types import ContractCallMode, FetchResult, ResolvedCallIntent
from .utils import json_encode_output

logger = logging.getLogger(__name__)


async def call_calldata(client: ChainClient, address: str, calldata: bytes) -> bytes:
    """Send raw calldata and unwrap the ABI encoded ``bytes`` return value."""

    raw_output = await client.call(address, calldata)
    # Calls to addresses without code come back empty
    if not raw_output:
        raise NotAContractError("Looks like the address is not a contract.", address=address)

    try:
        (payload,) = abi_decode(["bytes"], raw_output)
    except Exception as exc:
        raise NotAContractError(
            "Contract output is not an ABI encoded bytes value",
            address=address,
            details={"error": str(exc), "output_length": len(raw_output)},
        ) from exc
    return bytes(payload)


async def call_method(client: ChainClient, intent: ResolvedCallIntent) -> Any:
    method_name = cast(str, intent.method_name)
    abi = (function_abi(method_name, intent.method_arg_types, intent.method_return_types),)
    return await client.read_contract(
        cast(str, intent.contract_address),
        abi,
        method_name,
        list(intent.method_arg_values),
    )


async def fetch_parsed_url(
    parsed_url: ResolvedCallIntent, options: ResolverOptions | None = None
) -> FetchResult:
    """Execute a parsed web3:// URL from :func:`~web3url.resolver.parse_url`."""

    options = options or ResolverOptions()
    chain = resolve_chain(parsed_url.chain_id, options.chains)
    parsed_url.validate()

    client = options.client_for(chain)
    address = cast(str, parsed_url.contract_address)

    output: Any
    if parsed_url.contract_call_mode == ContractCallMode.CALLDATA:
        logger.debug("Calling %s on chain %s with raw calldata", address, chain.chain_id)
        output = await call_calldata(client, address, cast(bytes, parsed_url.calldata))
    else:
        logger.debug(
            "Calling %s.%s(%s) on chain %s",
            address,
            parsed_url.method_name,
            ",".join(parsed_url.method_arg_types),
            chain.chain_id,
        )
        output = await call_method(client, parsed_url)

    if parsed_url.method_return_json_encode:
        output = json_encode_output(output)

    return FetchResult(parsed_url=parsed_url, output=output, mime_type=parsed_url.mime_type)
