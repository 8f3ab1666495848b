"""Utility functions for web3:// result post-processing."""

import json
from typing import Any

from hexbytes import HexBytes

from .types import as_sequence


def stringify(value: Any) -> str:
    """Render a decoded ABI value the way it is shown in JSON encoded output."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes | bytearray | HexBytes):
        return "0x" + bytes(value).hex()
    if isinstance(value, list | tuple):
        return ",".join(stringify(item) for item in value)
    return str(value)


def json_encode_output(output: Any) -> str:
    """JSON encode one or several return values as an array of strings."""
    return json.dumps([stringify(item) for item in as_sequence(output)])
