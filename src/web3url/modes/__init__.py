"""Sub-parsers turning the path of a web3:// URL into call parameters."""

from .auto import parse_auto_url
from .manual import parse_manual_url

__all__ = ["parse_auto_url", "parse_manual_url"]
