"""Fetch web3:// URLs with custom RPC endpoints taken from the environment."""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from web3url import ChainDescriptor, ResolverOptions, Web3URLClient
from web3url.exceptions import Web3URLError

# Configure logging to see each resolution stage
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_URLS = [
    "web3://w3url.eth/",
    "web3://0xA5aFC9fE76a28fB12C60954Ed6e2e5f8ceF64Ff2/levelAndTile/2/50?returns=(uint256,uint256)",
]


def build_options() -> ResolverOptions:
    """Override RPC endpoints with MAINNET_RPC_URL / SEPOLIA_RPC_URL when set."""
    chains = []
    mainnet_rpc = os.getenv("MAINNET_RPC_URL")
    if mainnet_rpc:
        chains.append(ChainDescriptor(1, rpc_url=mainnet_rpc))
    sepolia_rpc = os.getenv("SEPOLIA_RPC_URL")
    if sepolia_rpc:
        chains.append(ChainDescriptor(11155111, rpc_url=sepolia_rpc))

    return ResolverOptions(
        chains=tuple(chains),
        request_timeout=float(os.getenv("RPC_TIMEOUT", "20")),
    )


async def main(urls: list[str]):
    """Resolve and fetch every URL given on the command line."""
    client = Web3URLClient(build_options())

    for url in urls:
        print("=" * 60)
        print(url)
        print("-" * 60)
        try:
            parsed = await client.parse_url(url)
            print(f"Chain: {parsed.chain_id}")
            print(f"Contract: {parsed.contract_address}")
            print(f"Mode: {parsed.mode.value} / {parsed.contract_call_mode.value}")

            result = await client.fetch_parsed_url(parsed)
        except Web3URLError as e:
            logger.error("Failed to fetch %s: %s (%s)", url, e.message, e.details)
            continue

        print(f"MIME type: {result.mime_type}")
        output = result.output
        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        print(output)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:] or DEFAULT_URLS))
