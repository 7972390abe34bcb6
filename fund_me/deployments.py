"""Deployment store shared by the deploy tasks of one run."""

import json
import logging
import time
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import boa
import requests
from boa.network import NetworkEnv
from boa.rpc import RPCError
from eth.codecs.abi.exceptions import EncodeError

from .constants import DEFAULT_CONFIRMATIONS
from .exceptions import DeploymentNotFoundError, TransactionFailure
from .settings import Settings

logger = logging.getLogger(__name__)

POLL_INTERVAL = 2.0  # seconds between eth_blockNumber polls


@dataclass(frozen=True)
class DeploymentRecord:
    """A contract deployed during the current run."""

    name: str
    address: str
    args: Tuple[Any, ...]
    deployer: str
    contract: Any = field(default=None, repr=False, compare=False)
    # Head block read after the deploy, not the transaction receipt
    details: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_json(self) -> Dict[str, Any]:
        """Serialize in the hardhat-deploy deployment file layout."""
        return {
            "address": self.address,
            "abi": list(self.contract.abi) if self.contract is not None else [],
            "args": list(self.args),
            "details": dict(self.details),
        }


class Deployments:
    """
    Keyed store of the deployments made in one fixture or script run.

    Deploying a name that is already in the store returns the cached record
    without sending a transaction.
    """

    def __init__(
        self,
        settings: Settings,
        verifier=None,
        env=None,
        poll_interval: float = POLL_INTERVAL,
    ):
        """
        Args:
            settings: Resolved settings of the target network
            verifier: VerificationClient used after persistent deployments
            env: boa environment (defaults to the active boa.env)
            poll_interval: Seconds between confirmation polls
        """
        self.settings = settings
        self.verifier = verifier
        self.poll_interval = poll_interval
        self._env = env
        self._records: Dict[str, DeploymentRecord] = {}

    @property
    def env(self):
        # boa.set_env() swaps the module attribute, so resolve late
        return self._env if self._env is not None else boa.env

    def log(self, message: str) -> None:
        logger.info(message)

    def deploy(
        self,
        name: str,
        deployer,
        args: Sequence[Any] = (),
        sender: Optional[str] = None,
        confirmations: int = DEFAULT_CONFIRMATIONS,
    ) -> DeploymentRecord:
        """
        Deploy a contract unless a deployment with this name already exists.

        Args:
            name: Deployment name (e.g. "FundMe")
            deployer: VyperDeployer of the contract
            args: Constructor arguments
            sender: Deploying account (defaults to env.eoa)
            confirmations: Blocks to wait for on RPC-backed networks

        Returns:
            The new or cached DeploymentRecord

        Raises:
            TransactionFailure: If the creation transaction fails
        """
        if name in self._records:
            record = self._records[name]
            self.log(f'reusing "{name}" at {record.address}')
            return record

        args = tuple(args)
        env = self.env
        if sender is None:
            sender = env.eoa
        prank = nullcontext() if sender == env.eoa else env.prank(sender)

        self.log(f'deploying "{name}" from {sender} with args {list(args)}')
        try:
            with prank:
                contract = deployer.deploy(*args)
        except (boa.BoaError, EncodeError, RPCError, requests.RequestException) as e:
            raise TransactionFailure(f"Deployment of {name} failed: {e}") from e

        block_number = self._block_number()
        self._wait_for_confirmations(block_number, confirmations)

        address = str(contract.address)
        record = DeploymentRecord(
            name=name,
            address=address,
            args=args,
            deployer=str(sender),
            contract=contract,
            details={
                "observedBlock": block_number,
                "from": str(sender),
                "contractAddress": address,
                "confirmations": confirmations,
            },
        )
        self._records[name] = record
        self.log(f'deployed "{name}" at {address} (head block {block_number})')
        return record

    def get(self, name: str) -> DeploymentRecord:
        """
        Raises:
            DeploymentNotFoundError: If nothing was deployed under this name
        """
        try:
            return self._records[name]
        except KeyError:
            raise DeploymentNotFoundError(f"No deployment found for: {name}") from None

    def has(self, name: str) -> bool:
        return name in self._records

    def records(self) -> List[DeploymentRecord]:
        return list(self._records.values())

    def reset(self) -> None:
        self._records.clear()

    def save(self, directory: Union[Path, str]) -> Path:
        """
        Write every record to <directory>/<network>/<name>.json.

        Returns:
            The network directory
        """
        network_dir = Path(directory) / self.settings.network
        network_dir.mkdir(parents=True, exist_ok=True)
        (network_dir / ".chainId").write_text(str(self.settings.chain_id))

        for record in self._records.values():
            with open(network_dir / f"{record.name}.json", "w") as f:
                json.dump(record.to_json(), f, indent=2)

        return network_dir

    def _uses_rpc(self) -> bool:
        return isinstance(self.env, NetworkEnv)

    def _block_number(self) -> int:
        if self._uses_rpc():
            return int(self.env._rpc.fetch("eth_blockNumber", []), 16)
        return self.env.evm.patch.block_number

    def _wait_for_confirmations(self, block_number: int, confirmations: int) -> None:
        # The in-process chain has instant finality
        if confirmations <= 1 or not self._uses_rpc():
            return

        target = block_number + confirmations - 1
        self.log(f"waiting for {confirmations} confirmations (block {target})")
        while self._block_number() < target:
            time.sleep(self.poll_interval)
