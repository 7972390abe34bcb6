"""Source verification on Etherscan-compatible block explorers."""

import logging
import re
from typing import Any, Optional, Sequence

import boa
import requests
from boa.explorer import Etherscan

from .constants import DEFAULT_EXPLORER_URL
from .exceptions import ConfigurationError, VerificationFailure
from .settings import Settings

logger = logging.getLogger(__name__)

API_KEY_PATTERN = re.compile(r"^[A-Za-z0-9]{34}$")


def validate_api_key(api_key: Optional[str]) -> str:
    """
    Raises:
        ConfigurationError: If the key is missing or not shaped like an Etherscan key
    """
    if not api_key or not api_key.strip():
        raise ConfigurationError("ETHERSCAN_API_KEY is not set")
    api_key = api_key.strip()
    if not API_KEY_PATTERN.match(api_key):
        raise ConfigurationError(
            "ETHERSCAN_API_KEY is malformed: expected 34 alphanumeric characters"
        )
    return api_key


class VerificationClient:
    """Submits deployed contracts to the explorer's verification API."""

    def __init__(
        self,
        api_key: Optional[str],
        explorer_url: str = DEFAULT_EXPLORER_URL,
        chain_id: int = 1,
        wait: bool = False,
    ):
        # The v2 API serves every chain from one endpoint, keyed by chain id
        self.verifier = Etherscan(uri=explorer_url, api_key=validate_api_key(api_key), chain_id=chain_id)
        self.wait = wait

    @classmethod
    def from_settings(cls, settings: Settings, wait: bool = False) -> "VerificationClient":
        return cls(settings.etherscan_api_key, settings.explorer_url, chain_id=settings.chain_id, wait=wait)

    def verify(self, contract, constructor_args: Sequence[Any] = ()) -> None:
        """
        Verify a deployed contract. Already verified contracts count as success.

        Raises:
            VerificationFailure: If the explorer rejects the request or polling times out
        """
        address = str(contract.address)
        logger.info("Verifying contract at %s with args %s", address, list(constructor_args))

        try:
            result = boa.verify(contract, self.verifier)
            if self.wait and result is not None:
                result.wait_for_verification()
        except (ValueError, TimeoutError, requests.RequestException) as e:
            if "already verified" in str(e).lower():
                logger.info("Contract at %s is already verified", address)
                return
            raise VerificationFailure(f"Verification of {address} failed: {e}") from e

        logger.info("Verification submitted for %s", address)
