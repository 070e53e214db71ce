from web3 import Web3
import logging

logger = logging.getLogger(__name__)


class NameResolver:
    """Best-effort lookup of a human-readable name for an address."""

    def reverse_resolve(self, address: str) -> str:
        raise NotImplementedError


class NullNameResolver(NameResolver):
    """Used when no Ethereum RPC endpoint is configured."""

    def reverse_resolve(self, address: str) -> str:
        return ""


class ENSNameResolver(NameResolver):
    """Reverse-resolves addresses to ENS names through a web3 client."""

    def __init__(self, w3: Web3):
        self.w3 = w3

    def reverse_resolve(self, address: str) -> str:
        # Not an error if the address can't be resolved to an ENS name
        try:
            name = self.w3.ens.name(Web3.to_checksum_address(address.strip()))
        except Exception as e:
            logger.debug(f"ENS reverse resolution failed for {address}: {e}")
            return ""
        return name or ""


def build_name_resolver(rpc_url: str | None) -> NameResolver:
    """Returns an ENS-backed resolver if an RPC URL is configured, otherwise a no-op one."""
    if not rpc_url:
        logger.info("No Ethereum RPC configured, ENS reverse resolution disabled.")
        return NullNameResolver()
    w3 = Web3(Web3.HTTPProvider(rpc_url))
    logger.info("ENS reverse resolution enabled.")
    return ENSNameResolver(w3)
