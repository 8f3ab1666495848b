"""Read-only async chain client used by the resolver and the executor."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from aiohttp import ClientTimeout
from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from .chains import ChainDescriptor
from .exceptions import Web3URLError

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 10.0


class ChainClient(Protocol):
    """Minimal read interface the resolver and executor rely on."""

    chain: ChainDescriptor

    async def read_contract(
        self,
        address: str,
        abi: Sequence[Mapping[str, Any]],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any: ...

    async def call(self, to: str, data: bytes) -> bytes | None: ...


def function_abi(
    name: str, input_types: Sequence[str], output_types: Sequence[str]
) -> dict[str, Any]:
    """Build a single view-function ABI fragment from bare type tags."""

    return {
        "inputs": [{"name": "", "type": type_} for type_ in input_types],
        "name": name,
        "outputs": [{"name": "", "type": type_} for type_ in output_types],
        "stateMutability": "view",
        "type": "function",
    }


def function_selector(name: str, input_types: Sequence[str]) -> bytes:
    signature = f"{name}({','.join(input_types)})"
    return bytes(Web3.keccak(text=signature)[:4])


def encode_function_call(name: str, input_types: Sequence[str], args: Sequence[Any]) -> bytes:
    call_data = function_selector(name, input_types)
    if input_types:
        call_data += abi_encode(list(input_types), list(args))
    return call_data


def _normalise_output(type_: str, value: Any) -> Any:
    """Checksum decoded addresses, including inside arrays."""

    if type_ == "address":
        return Web3.to_checksum_address(value)
    if type_.startswith("address[") and type_.endswith("]"):
        return tuple(_normalise_output(type_[: type_.rindex("[")], item) for item in value)
    return value


def _find_function(abi: Sequence[Mapping[str, Any]], function_name: str) -> Mapping[str, Any]:
    for entry in abi:
        if entry.get("type", "function") == "function" and entry.get("name") == function_name:
            return entry
    raise Web3URLError(
        f"Function '{function_name}' not found in ABI",
        details={"function": function_name},
    )


class Web3ChainClient:
    """Perform ``eth_call`` reads against a single chain through ``AsyncWeb3``."""

    def __init__(self, chain: ChainDescriptor, *, request_timeout: float = DEFAULT_REQUEST_TIMEOUT):
        self.chain = chain
        self.request_timeout = request_timeout
        self._web3: AsyncWeb3 | None = None

    def __repr__(self) -> str:
        return f"Web3ChainClient(chain_id={self.chain.chain_id}, rpc_url={self.chain.rpc_url!r})"

    @property
    def web3(self) -> AsyncWeb3:
        if self._web3 is None:
            provider = AsyncHTTPProvider(
                self.chain.rpc_url,
                request_kwargs={"timeout": ClientTimeout(total=self.request_timeout)},
            )
            self._web3 = AsyncWeb3(provider)
        return self._web3

    async def call(self, to: str, data: bytes) -> bytes | None:
        """Issue a raw ``eth_call``; return ``None`` when the node sends no data."""

        destination = Web3.to_checksum_address(to)
        logger.debug(
            "eth_call to %s on chain %s (%d bytes)", destination, self.chain.chain_id, len(data)
        )
        result = await self.web3.eth.call({"to": destination, "data": HexBytes(data)})
        if not result:
            return None
        return bytes(result)

    async def read_contract(
        self,
        address: str,
        abi: Sequence[Mapping[str, Any]],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """Call a view function and decode its outputs.

        A single output is returned as a scalar, several outputs as a tuple and
        no output as ``None``.
        """

        entry = _find_function(abi, function_name)
        input_types = [item["type"] for item in entry.get("inputs", [])]
        output_types = [item["type"] for item in entry.get("outputs", [])]

        call_data = encode_function_call(function_name, input_types, args)
        result = await self.call(address, call_data)

        if not output_types:
            return None

        decoded = [
            _normalise_output(type_, value)
            for type_, value in zip(output_types, abi_decode(output_types, result or b""))
        ]
        if len(decoded) == 1:
            return decoded[0]
        return tuple(decoded)


def create_chain_client(
    chain: ChainDescriptor, request_timeout: float = DEFAULT_REQUEST_TIMEOUT
) -> Web3ChainClient:
    return Web3ChainClient(chain, request_timeout=request_timeout)
