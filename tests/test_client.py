"""Tests for the web3 backed chain client."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest
from eth_abi import encode as abi_encode
from hexbytes import HexBytes
from web3 import Web3

from web3url.chains import ChainDescriptor
from web3url.client import (
    Web3ChainClient,
    encode_function_call,
    function_abi,
    function_selector,
)
from web3url.exceptions import Web3URLError

ADDRESS = "0x2222222222222222222222222222222222222222"


class DummyEth:
    def __init__(self, result: bytes) -> None:
        self.result = result
        self.calls: list[dict[str, Any]] = []

    async def call(self, transaction: dict[str, Any]) -> HexBytes:
        self.calls.append(transaction)
        return HexBytes(self.result)


def _client(result: bytes) -> tuple[Web3ChainClient, DummyEth]:
    eth = DummyEth(result)
    client = Web3ChainClient(ChainDescriptor(1, rpc_url="http://localhost:8545"))
    client._web3 = SimpleNamespace(eth=eth)  # type: ignore[assignment]
    return client, eth


def test_function_selector_matches_known_value():
    # keccak256("balanceOf(address)")[:4]
    assert function_selector("balanceOf", ["address"]) == bytes.fromhex("70a08231")


def test_encode_function_call_without_arguments():
    assert encode_function_call("resolveMode", [], []) == function_selector("resolveMode", [])


def test_read_contract_single_output():
    client, eth = _client(abi_encode(["uint256"], [1000]))
    abi = [function_abi("balanceOf", ["address"], ["uint256"])]

    result = asyncio.run(client.read_contract(ADDRESS, abi, "balanceOf", [ADDRESS]))

    assert result == 1000
    (transaction,) = eth.calls
    assert transaction["to"] == Web3.to_checksum_address(ADDRESS)
    assert bytes(transaction["data"]) == encode_function_call(
        "balanceOf", ["address"], [ADDRESS]
    )


def test_read_contract_several_outputs():
    client, _ = _client(abi_encode(["string", "bool"], ["hello", True]))
    abi = [function_abi("info", [], ["string", "bool"])]

    assert asyncio.run(client.read_contract(ADDRESS, abi, "info")) == ("hello", True)


def test_read_contract_single_address_output():
    owner = "0xabcdef0123456789abcdef0123456789abcdef01"
    client, _ = _client(abi_encode(["address"], [owner]))
    abi = [function_abi("owner", [], ["address"])]

    result = asyncio.run(client.read_contract(ADDRESS, abi, "owner"))

    assert result == Web3.to_checksum_address(owner)
    assert Web3.is_checksum_address(result)


def test_read_contract_checksums_addresses():
    owner = "0xabcdef0123456789abcdef0123456789abcdef01"
    client, _ = _client(abi_encode(["address", "address[]"], [owner, [owner, ADDRESS]]))
    abi = [function_abi("owners", [], ["address", "address[]"])]

    single, many = asyncio.run(client.read_contract(ADDRESS, abi, "owners"))

    expected = Web3.to_checksum_address(owner)
    assert single == expected
    assert many == (expected, Web3.to_checksum_address(ADDRESS))


def test_read_contract_unknown_function():
    client, _ = _client(b"")
    with pytest.raises(Web3URLError):
        asyncio.run(client.read_contract(ADDRESS, [], "missing"))


def test_call_returns_none_without_data():
    client, _ = _client(b"")
    assert asyncio.run(client.call(ADDRESS, b"/")) is None


def test_web3_is_built_lazily_from_rpc_url():
    client = Web3ChainClient(ChainDescriptor(1, rpc_url="http://localhost:8545"))
    assert client._web3 is None
    web3 = client.web3
    assert web3 is client.web3
    assert web3.provider.endpoint_uri == "http://localhost:8545"
