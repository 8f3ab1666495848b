"""Auto resolve mode: the URL path is translated into an ABI method call.

``/<method>/<arg>/<arg>?returns=(<type>,<type>)``

Arguments may carry an explicit type (``uint256!42``, ``string!hello``);
otherwise the type is inferred from the value. Values that look like none of
the supported literals are treated as domain names and resolved to an
address.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Any
from urllib.parse import parse_qsl, unquote

from web3 import Web3

from ..chains import ChainOverride
from ..client import ChainClient
from ..exceptions import InvalidArgumentError, UnresolvableNameError
from ..names import (
    ADDRESS_RE,
    DEFAULT_NAME_RESOLVERS,
    NameResolver,
    is_supported_domain_name,
    resolve_domain_name,
)
from ..types import CallParameters, ContractCallMode
from .mime import guess_mime_type, split_extension

logger = logging.getLogger(__name__)

_METHOD_NAME_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_INT_TYPE_RE = re.compile(r"^(?P<kind>u?int)(?P<bits>[0-9]*)$")
_BYTES_TYPE_RE = re.compile(r"^bytes(?P<size>[0-9]*)$")
_ARRAY_SUFFIX_RE = re.compile(r"(\[[0-9]*\])+$")
_DECIMAL_RE = re.compile(r"^[0-9]+$")
_BYTES32_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_HEX_BYTES_RE = re.compile(r"^0x(?:[0-9a-fA-F]{2})*$")

ARGUMENT_TYPE_SEPARATOR = "!"
RETURNS_KEY = "returns"


def normalise_type(type_: str, *, allow_arrays: bool = False) -> str:
    """Validate a Solidity type tag and expand ``uint``/``int`` aliases."""

    type_ = type_.strip()
    suffix = ""
    if allow_arrays:
        array_match = _ARRAY_SUFFIX_RE.search(type_)
        if array_match is not None:
            suffix = array_match.group(0)
            type_ = type_[: array_match.start()]

    if type_ in ("address", "bool", "string"):
        return type_ + suffix

    int_match = _INT_TYPE_RE.match(type_)
    if int_match is not None:
        bits = int(int_match.group("bits") or 256)
        if bits % 8 or not 8 <= bits <= 256:
            raise InvalidArgumentError(f"Invalid integer type {type_!r}", argument=type_)
        return f"{int_match.group('kind')}{bits}{suffix}"

    bytes_match = _BYTES_TYPE_RE.match(type_)
    if bytes_match is not None:
        size = bytes_match.group("size")
        if size and not 1 <= int(size) <= 32:
            raise InvalidArgumentError(f"Invalid bytes type {type_!r}", argument=type_)
        return type_ + suffix

    raise InvalidArgumentError(f"Unsupported type {type_!r}", argument=type_)


def parse_return_types(value: str) -> tuple[str, ...]:
    """Parse ``(t1,t2)``; ``()`` means the raw ``bytes`` return value."""

    value = value.strip()
    if not (value.startswith("(") and value.endswith(")")):
        raise InvalidArgumentError(
            "returns must be a parenthesised list of types", argument=RETURNS_KEY, value=value
        )

    inner = value[1:-1].strip()
    if not inner:
        return ("bytes",)
    return tuple(normalise_type(item, allow_arrays=True) for item in inner.split(","))


def _parse_int(value: str, type_: str) -> int:
    try:
        number = int(value, 16) if value.lower().startswith("0x") else int(value, 10)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Invalid {type_} value {value!r}", argument=type_, value=value
        ) from exc

    bits = int(type_.removeprefix("u").removeprefix("int"))
    if type_.startswith("u"):
        low, high = 0, 2**bits - 1
    else:
        low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    if not low <= number <= high:
        raise InvalidArgumentError(
            f"Value {value!r} out of range for {type_}", argument=type_, value=value
        )
    return number


def _parse_bytes(value: str, type_: str) -> bytes:
    if not _HEX_BYTES_RE.match(value):
        raise InvalidArgumentError(
            f"Invalid {type_} value {value!r}, expected 0x-prefixed hex",
            argument=type_,
            value=value,
        )
    data = bytes.fromhex(value[2:])
    size = type_[len("bytes") :]
    if size and len(data) > int(size):
        raise InvalidArgumentError(
            f"Value {value!r} is longer than {type_}", argument=type_, value=value
        )
    return data


async def _resolve_address(
    value: str,
    client: ChainClient,
    resolvers: Sequence[NameResolver],
    chains: Iterable[ChainOverride],
) -> str:
    if ADDRESS_RE.match(value):
        return Web3.to_checksum_address(value)

    if not is_supported_domain_name(value, client.chain, resolvers):
        raise InvalidArgumentError(
            f"Argument {value!r} is neither a literal nor a resolvable name",
            argument="address",
            value=value,
        )

    try:
        resolution = await resolve_domain_name(value, client, resolvers, chains)
    except Exception as exc:
        raise UnresolvableNameError(
            f"Failed to resolve domain name {value} : {exc}", name=value
        ) from exc
    return Web3.to_checksum_address(resolution.address)


async def parse_argument(
    segment: str,
    client: ChainClient,
    resolvers: Sequence[NameResolver] = DEFAULT_NAME_RESOLVERS,
    chains: Iterable[ChainOverride] = (),
) -> tuple[str, Any]:
    """Return the ``(type, value)`` pair for a single path segment."""

    explicit_type, separator, value = segment.partition(ARGUMENT_TYPE_SEPARATOR)
    if separator:
        type_ = normalise_type(explicit_type)
        if type_.startswith(("uint", "int")):
            return type_, _parse_int(value, type_)
        if type_.startswith("bytes"):
            return type_, _parse_bytes(value, type_)
        if type_ == "bool":
            if value not in ("true", "false"):
                raise InvalidArgumentError(
                    f"Invalid bool value {value!r}", argument=type_, value=value
                )
            return type_, value == "true"
        if type_ == "address":
            return type_, await _resolve_address(value, client, resolvers, chains)
        return type_, value

    if _DECIMAL_RE.match(segment):
        return "uint256", _parse_int(segment, "uint256")
    if ADDRESS_RE.match(segment):
        return "address", Web3.to_checksum_address(segment)
    if _BYTES32_RE.match(segment):
        return "bytes32", bytes.fromhex(segment[2:])
    if _HEX_BYTES_RE.match(segment):
        return "bytes", bytes.fromhex(segment[2:])
    return "address", await _resolve_address(segment, client, resolvers, chains)


async def parse_auto_url(
    path: str | None,
    client: ChainClient,
    resolvers: Sequence[NameResolver] = DEFAULT_NAME_RESOLVERS,
    chains: Iterable[ChainOverride] = (),
) -> CallParameters:
    """Translate an auto-mode path into call parameters."""

    path, _, query = (path or "").partition("?")
    segments = [unquote(segment) for segment in path.split("/") if segment]
    if not segments:
        logger.debug("Auto mode with empty path, calling with empty calldata")
        return CallParameters(contract_call_mode=ContractCallMode.CALLDATA, calldata=b"")

    return_types: tuple[str, ...] | None = None
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key == RETURNS_KEY:
            return_types = parse_return_types(value)

    mime_type = None
    if return_types is None:
        stem, ext = split_extension(segments[-1])
        mime_type = guess_mime_type(segments[-1])
        if mime_type is not None and ext is not None:
            segments[-1] = stem

    method_name, *raw_args = segments
    if not _METHOD_NAME_RE.match(method_name):
        raise InvalidArgumentError(
            f"Invalid method name {method_name!r}", argument="method", value=method_name
        )

    arg_types: list[str] = []
    arg_values: list[Any] = []
    for raw_arg in raw_args:
        type_, value = await parse_argument(raw_arg, client, resolvers, chains)
        arg_types.append(type_)
        arg_values.append(value)

    logger.debug(
        "Auto mode call %s(%s) returns %s", method_name, ",".join(arg_types), return_types
    )
    if return_types is None:
        return CallParameters(
            contract_call_mode=ContractCallMode.METHOD,
            method_name=method_name,
            method_arg_types=tuple(arg_types),
            method_arg_values=tuple(arg_values),
            mime_type=mime_type,
        )
    return CallParameters(
        contract_call_mode=ContractCallMode.METHOD,
        method_name=method_name,
        method_arg_types=tuple(arg_types),
        method_arg_values=tuple(arg_values),
        method_return_types=return_types,
        method_return_json_encode=True,
    )
