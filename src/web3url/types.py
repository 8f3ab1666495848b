"""Type definitions and data models for web3:// URL resolution."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from .exceptions import InvalidIntentError

DEFAULT_CHAIN_ID = 1
DEFAULT_RETURN_TYPES = ("string",)

T = TypeVar("T")


class ResolveMode(str, Enum):
    """How the URL path is interpreted, as advertised by the contract."""

    AUTO = "auto"
    MANUAL = "manual"


class ContractCallMode(str, Enum):
    """How the contract is invoked by the executor."""

    CALLDATA = "calldata"  # Raw input bytes
    METHOD = "method"  # ABI-encoded function call


@dataclass(frozen=True)
class NameResolution:
    """Diagnostic record of the name that was resolved and the chain it was queried on."""

    chain_id: int
    resolved_name: str


@dataclass(frozen=True)
class NameResolutionResult:
    """Outcome of a name resolver lookup."""

    address: str
    chain_id: int | None = None


@dataclass(frozen=True)
class CallParameters:
    """Partial intent produced by a mode sub-parser."""

    contract_call_mode: ContractCallMode
    calldata: bytes | None = None
    method_name: str | None = None
    method_arg_types: tuple[str, ...] = ()
    method_arg_values: tuple[Any, ...] = ()
    method_return_types: tuple[str, ...] = DEFAULT_RETURN_TYPES
    method_return_json_encode: bool = False
    mime_type: str | None = None


@dataclass(frozen=True)
class ResolvedCallIntent:
    """Fully resolved web3:// URL, ready to be executed.

    Instances are built by the resolution pipeline one stage at a time with
    :func:`dataclasses.replace`; once handed to the executor they are never
    modified.
    """

    chain_id: int = DEFAULT_CHAIN_ID
    contract_address: str | None = None
    name_resolution: NameResolution | None = None
    mode: ResolveMode = ResolveMode.AUTO
    contract_call_mode: ContractCallMode | None = None
    calldata: bytes | None = None
    method_name: str | None = None
    method_arg_types: tuple[str, ...] = ()
    method_arg_values: tuple[Any, ...] = ()
    method_return_types: tuple[str, ...] = DEFAULT_RETURN_TYPES
    # If set, the return value(s) are JSON encoded as an array of strings
    method_return_json_encode: bool = False
    # Ignored by consumers when method_return_json_encode is set
    mime_type: str | None = None

    def with_call_parameters(self, params: CallParameters) -> "ResolvedCallIntent":
        """Return a copy of the intent with the sub-parser output merged in."""

        return replace(
            self,
            contract_call_mode=params.contract_call_mode,
            calldata=params.calldata,
            method_name=params.method_name,
            method_arg_types=tuple(params.method_arg_types),
            method_arg_values=tuple(params.method_arg_values),
            method_return_types=tuple(params.method_return_types),
            method_return_json_encode=params.method_return_json_encode,
            mime_type=params.mime_type,
        )

    def validate(self) -> None:
        """Raise :class:`InvalidIntentError` if the intent cannot be executed."""

        if not isinstance(self.chain_id, int) or self.chain_id <= 0:
            raise InvalidIntentError(
                "Chain id must be a positive integer", field="chain_id", value=self.chain_id
            )
        if not self.contract_address:
            raise InvalidIntentError("Contract address is not set", field="contract_address")

        if self.contract_call_mode == ContractCallMode.CALLDATA:
            if self.calldata is None:
                raise InvalidIntentError(
                    "Calldata mode requires calldata", field="calldata", value=self.calldata
                )
        elif self.contract_call_mode == ContractCallMode.METHOD:
            if not self.method_name:
                raise InvalidIntentError("Method mode requires a method name", field="method_name")
            if len(self.method_arg_types) != len(self.method_arg_values):
                raise InvalidIntentError(
                    "Method argument types and values are not aligned",
                    field="method_arg_values",
                    details={
                        "types": list(self.method_arg_types),
                        "values": list(self.method_arg_values),
                    },
                )
        else:
            raise InvalidIntentError(
                "Contract call mode is not set",
                field="contract_call_mode",
                value=self.contract_call_mode,
            )


@dataclass(frozen=True)
class FetchResult:
    """Output of executing a resolved intent."""

    parsed_url: ResolvedCallIntent
    output: Any
    mime_type: str | None = None


@dataclass(frozen=True)
class ProbeResult(Generic[T]):
    """Outcome of a best-effort chain read: either a value or the error it raised."""

    value: T | None = None
    error: BaseException | None = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: T) -> T:
        """Return the value, or ``default`` when the read failed."""

        if self.error is not None or self.value is None:
            return default
        return self.value


def as_sequence(value: Any) -> list[Any]:
    """Wrap scalars in a list; pass lists and tuples through."""

    if isinstance(value, list | tuple):
        return list(value)
    return [value]
