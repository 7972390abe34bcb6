"""Runtime settings, resolved once from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .constants import (
    DEFAULT_CONFIRMATIONS,
    DEFAULT_EXPLORER_URL,
    DEFAULT_KEYSTORE_DIR,
    DEFAULT_RPC_URL,
    DEVELOPMENT_CHAINS,
    NETWORK_CONFIG,
    NETWORKS,
)
from .exceptions import ConfigurationError

DEFAULT_NETWORK = "pyevm"


@dataclass(frozen=True)
class Settings:
    """Everything the deploy tasks need to know about the target network."""

    network: str
    chain_id: int
    rpc_url: Optional[str] = None
    etherscan_api_key: Optional[str] = None
    explorer_url: str = DEFAULT_EXPLORER_URL
    block_confirmations: int = DEFAULT_CONFIRMATIONS
    private_key: Optional[str] = None
    account_name: Optional[str] = None
    keystore_dir: Path = DEFAULT_KEYSTORE_DIR

    @property
    def is_development(self) -> bool:
        return self.network in DEVELOPMENT_CHAINS

    @property
    def verification_enabled(self) -> bool:
        return not self.is_development and bool(self.etherscan_api_key)


def _get(environ: Mapping[str, str], key: str) -> Optional[str]:
    # Blank values in .env files count as unset
    value = environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings(
    network: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Resolve settings for a network.

    Args:
        network: Network name (defaults to $FUND_ME_NETWORK, then "pyevm")
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings for the network

    Raises:
        ConfigurationError: If the network is unknown or a value is malformed
    """
    if environ is None:
        environ = os.environ

    if network is None:
        network = _get(environ, "FUND_ME_NETWORK") or DEFAULT_NETWORK

    if network not in NETWORKS:
        raise ConfigurationError(
            f"Unknown network '{network}'. Known networks: {', '.join(sorted(NETWORKS))}"
        )
    chain_id = NETWORKS[network]

    rpc_url = _get(environ, f"{network.upper()}_RPC_URL") or _get(environ, "WEB3_PROVIDER_URL")
    if rpc_url is None and network == "localhost":
        rpc_url = DEFAULT_RPC_URL

    confirmations = NETWORK_CONFIG.get(chain_id, {}).get("block_confirmations", DEFAULT_CONFIRMATIONS)
    override = _get(environ, "BLOCK_CONFIRMATIONS")
    if override is not None:
        try:
            confirmations = int(override)
        except ValueError as e:
            raise ConfigurationError(f"BLOCK_CONFIRMATIONS must be an integer, got '{override}'") from e
        if confirmations < 1:
            raise ConfigurationError("BLOCK_CONFIRMATIONS must be at least 1")

    keystore_dir = _get(environ, "FUND_ME_KEYSTORE_DIR")

    return Settings(
        network=network,
        chain_id=chain_id,
        rpc_url=rpc_url,
        etherscan_api_key=_get(environ, "ETHERSCAN_API_KEY"),
        explorer_url=_get(environ, "EXPLORER_URL") or DEFAULT_EXPLORER_URL,
        block_confirmations=confirmations,
        private_key=_get(environ, "PRIVATE_KEY"),
        account_name=_get(environ, "FUND_ME_ACCOUNT"),
        keystore_dir=Path(keystore_dir) if keystore_dir else DEFAULT_KEYSTORE_DIR,
    )
