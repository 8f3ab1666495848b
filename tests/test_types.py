"""Tests for web3url.types."""

import pytest

from web3url.exceptions import InvalidIntentError
from web3url.types import (
    CallParameters,
    ContractCallMode,
    ProbeResult,
    ResolvedCallIntent,
    ResolveMode,
)

ADDRESS = "0x1111111111111111111111111111111111111111"


def test_intent_defaults():
    intent = ResolvedCallIntent()
    assert intent.chain_id == 1
    assert intent.mode == ResolveMode.AUTO
    assert intent.method_return_types == ("string",)
    assert intent.method_return_json_encode is False
    assert intent.name_resolution is None
    assert intent.mime_type is None


def test_intent_is_immutable():
    intent = ResolvedCallIntent()
    with pytest.raises(AttributeError):
        intent.chain_id = 5  # type: ignore[misc]


def test_with_call_parameters_returns_new_intent():
    intent = ResolvedCallIntent(chain_id=10, contract_address=ADDRESS)
    params = CallParameters(
        contract_call_mode=ContractCallMode.METHOD,
        method_name="name",
        method_arg_types=["uint256"],  # type: ignore[arg-type]
        method_arg_values=[1],  # type: ignore[arg-type]
        mime_type="text/plain",
    )

    merged = intent.with_call_parameters(params)

    assert merged is not intent
    assert intent.contract_call_mode is None
    assert merged.chain_id == 10
    assert merged.contract_address == ADDRESS
    assert merged.method_arg_types == ("uint256",)
    assert merged.method_arg_values == (1,)
    assert merged.mime_type == "text/plain"
    merged.validate()


class TestValidate:
    """Intent invariants."""

    @pytest.mark.parametrize(
        ("fields", "field"),
        [
            ({"chain_id": 0}, "chain_id"),
            ({"contract_address": None}, "contract_address"),
            ({"calldata": None}, "calldata"),
        ],
    )
    def test_calldata_intent(self, fields, field):
        base = {
            "contract_address": ADDRESS,
            "contract_call_mode": ContractCallMode.CALLDATA,
            "calldata": b"",
        }
        base.update(fields)
        with pytest.raises(InvalidIntentError) as excinfo:
            ResolvedCallIntent(**base).validate()
        assert excinfo.value.field == field

    def test_method_intent_requires_aligned_arguments(self):
        intent = ResolvedCallIntent(
            contract_address=ADDRESS,
            contract_call_mode=ContractCallMode.METHOD,
            method_name="f",
            method_arg_types=("uint256", "address"),
            method_arg_values=(1,),
        )
        with pytest.raises(InvalidIntentError) as excinfo:
            intent.validate()
        assert excinfo.value.details["types"] == ["uint256", "address"]

    def test_method_intent_requires_name(self):
        intent = ResolvedCallIntent(
            contract_address=ADDRESS, contract_call_mode=ContractCallMode.METHOD
        )
        with pytest.raises(InvalidIntentError):
            intent.validate()


class TestProbeResult:
    """Best-effort read outcomes."""

    def test_value(self):
        probe = ProbeResult(value=b"auto")
        assert probe.ok
        assert probe.value_or(b"") == b"auto"

    def test_error_collapses_to_default(self):
        probe: ProbeResult[bytes] = ProbeResult(error=RuntimeError("revert"))
        assert not probe.ok
        assert probe.value_or(b"") == b""
