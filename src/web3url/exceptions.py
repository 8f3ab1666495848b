"""Exception hierarchy for web3:// URL resolution."""

from typing import Any


class Web3URLError(Exception):
    """Base exception for all web3:// resolution and fetch errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MalformedUrlError(Web3URLError):
    """Raised when a URL does not match the web3:// grammar."""

    def __init__(self, message: str, url: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.url = url


class UnsupportedProtocolError(Web3URLError):
    """Raised when the URL scheme is not ``web3``."""

    def __init__(self, message: str, protocol: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.protocol = protocol


class UnknownChainError(Web3URLError):
    """Raised when a chain id is neither overridden nor in the built-in registry."""

    def __init__(
        self,
        message: str,
        chain_id: int | None = None,
        short_name: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.chain_id = chain_id
        self.short_name = short_name


class UnresolvableNameError(Web3URLError):
    """Raised when a hostname cannot be resolved to a contract address."""

    def __init__(self, message: str, name: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.name = name


class UnsupportedResolveModeError(Web3URLError):
    """Raised when a contract advertises a resolve mode we do not know."""

    def __init__(self, message: str, mode: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.mode = mode


class NotAContractError(Web3URLError):
    """Raised when a calldata call returns nothing usable."""

    def __init__(self, message: str, address: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.address = address


class InvalidArgumentError(Web3URLError):
    """Raised when an auto-mode path segment cannot be turned into a call argument."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.argument = argument
        self.value = value


class InvalidIntentError(Web3URLError):
    """Raised when a resolved call intent violates its own invariants."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value
