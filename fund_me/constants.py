"""Network tables and fixed deployment parameters."""

from pathlib import Path

CONTRACTS_DIR = Path(__file__).resolve().parent

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Networks without persistent state or a block explorer
DEVELOPMENT_CHAINS = ("pyevm", "hardhat", "localhost")

# Development networks served by boa's in-process chain (no RPC needed)
IN_PROCESS_CHAINS = ("pyevm", "hardhat")

# MockV3Aggregator constructor: 2000 USD/ETH with 8 decimals
DECIMALS = 8
INITIAL_ANSWER = 2000 * 10**DECIMALS

DEFAULT_CONFIRMATIONS = 1

NETWORKS = {
    "pyevm": 31337,
    "hardhat": 31337,
    "localhost": 31337,
    "sepolia": 11155111,
    "mainnet": 1,
    "polygon": 137,
}

# Keyed by chain id; Chainlink ETH/USD feeds
NETWORK_CONFIG = {
    31337: {
        "name": "localhost",
    },
    11155111: {
        "name": "sepolia",
        "eth_usd_price_feed": "0x694AA1769357215DE4FAC081bf1f309aDC325306",
        "block_confirmations": 6,
    },
    1: {
        "name": "mainnet",
        "eth_usd_price_feed": "0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419",
        "block_confirmations": 6,
    },
    137: {
        "name": "polygon",
        "eth_usd_price_feed": "0xF9680D99D6C9589e2a93a78A04A279e29a9bF0c9",
        "block_confirmations": 6,
    },
}

DEFAULT_EXPLORER_URL = "https://api.etherscan.io/v2/api"
DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_KEYSTORE_DIR = Path("~", ".brownie", "accounts")
