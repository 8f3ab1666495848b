"""Manual resolve mode: the URL path is forwarded verbatim as calldata."""

from __future__ import annotations

import logging

from ..types import CallParameters, ContractCallMode
from .mime import guess_mime_type

logger = logging.getLogger(__name__)


def parse_manual_url(path: str | None) -> CallParameters:
    """Turn the path (query included) into raw calldata."""

    path = path or "/"
    path_only = path.split("?", 1)[0]
    mime_type = guess_mime_type(path_only.rsplit("/", 1)[-1])

    logger.debug("Manual mode calldata %r (mime=%s)", path, mime_type)
    return CallParameters(
        contract_call_mode=ContractCallMode.CALLDATA,
        calldata=path.encode("utf-8"),
        mime_type=mime_type,
    )
