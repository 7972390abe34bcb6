"""Network classification, price feed resolution and chain connection."""

import json
import logging
from getpass import getpass
from typing import Any, Dict

import boa
from boa.network import ExternalAccount, NetworkEnv
from eth_account import account
from eth_utils import is_hex_address

from .constants import DEVELOPMENT_CHAINS, IN_PROCESS_CHAINS, NETWORK_CONFIG, NETWORKS
from .exceptions import ConfigurationError, MissingMockError, MissingNetworkConfigError
from .settings import Settings

logger = logging.getLogger(__name__)

MOCK_NAME = "MockV3Aggregator"


def is_development_network(name: str) -> bool:
    return name in DEVELOPMENT_CHAINS


def chain_id_for(network: str) -> int:
    try:
        return NETWORKS[network]
    except KeyError:
        raise ConfigurationError(f"Unknown network '{network}'") from None


def get_network_config(chain_id: int) -> Dict[str, Any]:
    """
    Raises:
        MissingNetworkConfigError: If the chain id has no entry
    """
    if chain_id not in NETWORK_CONFIG:
        raise MissingNetworkConfigError(f"No network configuration for chain id {chain_id}")
    return NETWORK_CONFIG[chain_id]


def resolve_price_feed_address(chain_id: int, network: str, deployments) -> str:
    """
    Pick the ETH/USD feed to wire into the FundMe constructor.

    Args:
        chain_id: Chain id of the target network
        network: Network name
        deployments: Deployment store of the current run

    Returns:
        The mock's address on development networks, the configured feed otherwise

    Raises:
        MissingMockError: Development network without a deployed mock
        MissingNetworkConfigError: Persistent network without a configured feed
    """
    if is_development_network(network):
        if not deployments.has(MOCK_NAME):
            raise MissingMockError(
                f"{MOCK_NAME} is not deployed on '{network}'; run the 'mocks' tag first"
            )
        return deployments.get(MOCK_NAME).address

    address = get_network_config(chain_id).get("eth_usd_price_feed")
    if not address:
        raise MissingNetworkConfigError(
            f"No eth_usd_price_feed configured for chain id {chain_id} ({network})"
        )
    if not is_hex_address(address):
        raise MissingNetworkConfigError(
            f"eth_usd_price_feed for chain id {chain_id} ({network}) is not an address: {address}"
        )
    return address


def account_load(settings: Settings):
    """Load the deployer from $PRIVATE_KEY or an encrypted keystore file."""
    if settings.private_key:
        return account.Account.from_key(settings.private_key)

    if not settings.account_name:
        raise ConfigurationError(
            f"Network '{settings.network}' needs a deployer: set PRIVATE_KEY or FUND_ME_ACCOUNT"
        )

    path = settings.keystore_dir.expanduser() / f"{settings.account_name}.json"
    if not path.exists():
        raise ConfigurationError(f"Keystore file not found: {path}")
    with open(path, "r") as f:
        pkey = account.decode_keyfile_json(json.load(f), getpass())
        return account.Account.from_key(pkey)


def connect(settings: Settings) -> str:
    """
    Point boa at the target network.

    Returns:
        Address of the deployer account
    """
    if settings.network in IN_PROCESS_CHAINS:
        logger.info("Using in-process chain for '%s'", settings.network)
        return str(boa.env.eoa)

    if not settings.rpc_url:
        raise ConfigurationError(
            f"No RPC URL for '{settings.network}': set {settings.network.upper()}_RPC_URL"
        )

    if settings.network == "localhost" and not (settings.private_key or settings.account_name):
        env = NetworkEnv(settings.rpc_url)
        deployer = _node_account(env)
    else:
        deployer = account_load(settings)
        env = NetworkEnv(settings.rpc_url)

    boa.set_env(env)
    env.add_account(deployer, force_eoa=True)
    logger.info("Connected to %s as %s", settings.network, deployer.address)
    return str(deployer.address)


def _node_account(env):
    # Local nodes (hardhat, anvil) sign for their unlocked accounts
    accounts = env._rpc.fetch("eth_accounts", [])
    if not accounts:
        raise ConfigurationError(
            "The localhost node has no unlocked accounts: set PRIVATE_KEY or FUND_ME_ACCOUNT"
        )
    return ExternalAccount(accounts[0], env._rpc)
