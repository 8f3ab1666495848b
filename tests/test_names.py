"""Tests for ENS based name resolution."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest
from ens.exceptions import ResolverNotFound, UnsupportedFunction
from stubs import OTHER_CONTRACT, StubChainClient

from web3url import names
from web3url.chains import ChainDescriptor
from web3url.exceptions import UnknownChainError, UnresolvableNameError
from web3url.names import (
    ENSResolver,
    is_supported_domain_name,
    parse_content_contract,
    resolve_domain_name,
)
from web3url.types import NameResolutionResult

MAINNET = ChainDescriptor(1, rpc_url="http://mainnet")
OPTIMISM = ChainDescriptor(10, rpc_url="http://optimism")


class DummyENS:
    def __init__(self, texts: dict[str, Any], addresses: dict[str, str]) -> None:
        self.texts = texts
        self.addresses = addresses

    async def get_text(self, name: str, key: str) -> str:
        assert key == "contentcontract"
        text = self.texts.get(name, "")
        if isinstance(text, Exception):
            raise text
        return text

    async def address(self, name: str) -> str | None:
        return self.addresses.get(name)


@pytest.fixture
def dummy_ens(monkeypatch: pytest.MonkeyPatch) -> DummyENS:
    ens = DummyENS(texts={}, addresses={})
    monkeypatch.setattr(names, "AsyncENS", SimpleNamespace(from_web3=lambda web3: ens))
    return ens


def _web3_client(chain: ChainDescriptor = MAINNET) -> Any:
    client = StubChainClient(chain)
    client.web3 = object()  # type: ignore[attr-defined]
    return client


class TestParseContentContract:
    """contentcontract text record formats."""

    def test_plain_address(self):
        assert parse_content_contract(OTHER_CONTRACT) == NameResolutionResult(OTHER_CONTRACT)

    def test_chain_specific_address(self):
        result = parse_content_contract(f"w3q-g:{OTHER_CONTRACT}")
        assert result == NameResolutionResult(OTHER_CONTRACT, chain_id=3334)

    def test_unknown_short_name(self):
        with pytest.raises(UnknownChainError):
            parse_content_contract(f"nochain:{OTHER_CONTRACT}")

    def test_garbage(self):
        with pytest.raises(UnresolvableNameError):
            parse_content_contract("not an address")


def test_ens_support_depends_on_tld_and_chain():
    resolver = ENSResolver()
    assert resolver.is_supported("vitalik.eth", MAINNET)
    assert resolver.is_supported("Vitalik.ETH", MAINNET)
    assert not resolver.is_supported("vitalik.eth", OPTIMISM)
    assert not resolver.is_supported("example.com", MAINNET)
    assert is_supported_domain_name("vitalik.eth", MAINNET)


def test_ens_prefers_content_contract(dummy_ens):
    dummy_ens.texts["site.eth"] = f"w3q-g:{OTHER_CONTRACT}"
    dummy_ens.addresses["site.eth"] = "0x3333333333333333333333333333333333333333"

    result = asyncio.run(ENSResolver().resolve("site.eth", _web3_client()))

    assert result == NameResolutionResult(OTHER_CONTRACT, chain_id=3334)


def test_ens_falls_back_to_address_record(dummy_ens):
    dummy_ens.addresses["site.eth"] = OTHER_CONTRACT

    result = asyncio.run(ENSResolver().resolve("site.eth", _web3_client()))

    assert result == NameResolutionResult(OTHER_CONTRACT)


@pytest.mark.parametrize(
    "error", [ResolverNotFound("no text profile"), UnsupportedFunction("text")]
)
def test_ens_unreadable_text_record_falls_back_to_address(dummy_ens, error):
    dummy_ens.texts["site.eth"] = error
    dummy_ens.addresses["site.eth"] = OTHER_CONTRACT

    result = asyncio.run(ENSResolver().resolve("site.eth", _web3_client()))

    assert result == NameResolutionResult(OTHER_CONTRACT)


def test_ens_name_without_address(dummy_ens):
    with pytest.raises(UnresolvableNameError) as excinfo:
        asyncio.run(ENSResolver().resolve("empty.eth", _web3_client()))
    assert excinfo.value.name == "empty.eth"


def test_ens_requires_web3_client():
    with pytest.raises(UnresolvableNameError):
        asyncio.run(ENSResolver().resolve("site.eth", StubChainClient(MAINNET)))


def test_resolve_domain_name_without_supporting_resolver():
    with pytest.raises(UnresolvableNameError) as excinfo:
        asyncio.run(resolve_domain_name("site.eth", _web3_client(OPTIMISM)))
    assert excinfo.value.details["chain_id"] == 10
