"""
fund_me: deployment scripts and fixtures for the FundMe contract
"""

from importlib.metadata import PackageNotFoundError, version

from .deployments import DeploymentRecord, Deployments
from .exceptions import (
    ConfigurationError,
    DeploymentError,
    DeploymentNotFoundError,
    MissingMockError,
    MissingNetworkConfigError,
    TransactionFailure,
    VerificationFailure,
)
from .networks import is_development_network, resolve_price_feed_address
from .settings import Settings, load_settings

try:
    __version__ = version("fund-me")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "Deployments",
    "DeploymentRecord",
    "Settings",
    "load_settings",
    "is_development_network",
    "resolve_price_feed_address",
    "DeploymentError",
    "ConfigurationError",
    "MissingNetworkConfigError",
    "MissingMockError",
    "DeploymentNotFoundError",
    "TransactionFailure",
    "VerificationFailure",
]
