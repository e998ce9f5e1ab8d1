"""
Web3 deployment context for the Kake migrations.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from .artifacts import Artifact

logger = logging.getLogger(__name__)


class DeploymentError(Exception):
    """Raised when a contract-creation transaction does not succeed."""


@dataclass(frozen=True)
class Deployment:
    contract_name: str
    address: str
    transaction_hash: str
    block_number: int
    args: Tuple[Any, ...] = field(default_factory=tuple)


def connect(rpc_url: str) -> Web3:
    """Open an HTTP connection to the node at ``rpc_url``."""
    w3 = Web3(Web3.HTTPProvider(rpc_url))
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    if not w3.is_connected():
        raise ConnectionError(f"Could not connect to RPC URL: {rpc_url}")
    logger.info(f"Connected to blockchain at {rpc_url}")
    return w3


class Web3Deployer:
    """
    Deploys artifacts from a single local account.

    Each call to ``deploy`` blocks until the receipt is available, so
    deployments land in the order they are requested.
    """

    def __init__(self, w3: Web3, private_key: str, gas_limit: Optional[int] = None,
                 receipt_timeout: int = 300):
        self.w3 = w3
        self.private_key = private_key
        self.gas_limit = gas_limit
        self.receipt_timeout = receipt_timeout
        self.account = w3.eth.account.from_key(private_key)
        self.chain_id = w3.eth.chain_id
        self.deployments: List[Deployment] = []

        logger.info(f"Using deployer account: {self.account.address}")

    def deploy(self, artifact: Artifact, *args: Any) -> Deployment:
        name = artifact.contract_name
        logger.info(f"Deploying {name} with arguments {list(args)}")
        try:
            contract = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

            tx_params: Dict[str, Any] = {
                'from': self.account.address,
                'nonce': self.w3.eth.get_transaction_count(self.account.address),
                'gasPrice': self.w3.eth.gas_price,
            }
            if self.gas_limit is not None:
                tx_params['gas'] = self.gas_limit

            tx = contract.constructor(*args).build_transaction(tx_params)
            signed_tx = self.w3.eth.account.sign_transaction(tx, self.private_key)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            logger.info(f"{name} transaction sent: {Web3.to_hex(tx_hash)}")

            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except Exception as e:
            logger.error(f"Failed to deploy {name}: {e}")
            raise

        if receipt['status'] != 1:
            logger.error(f"{name} deployment reverted in block {receipt['blockNumber']}")
            raise DeploymentError(f"Deployment of {name} failed (transaction {Web3.to_hex(tx_hash)})")

        deployment = Deployment(
            contract_name=name,
            address=receipt['contractAddress'],
            transaction_hash=Web3.to_hex(tx_hash),
            block_number=receipt['blockNumber'],
            args=tuple(args),
        )
        self.deployments.append(deployment)
        logger.info(f"{name} deployed at {deployment.address} in block {deployment.block_number}")
        return deployment

    def addresses(self) -> Dict[str, str]:
        return {d.contract_name: d.address for d in self.deployments}

    def save(self, file_path: str):
        """Write the addresses of this run's deployments to ``file_path``."""
        record = {
            'network': self.chain_id,
            'deployer': self.account.address,
            'contracts': self.addresses(),
            'transactions': {d.contract_name: d.transaction_hash for d in self.deployments},
        }
        with open(file_path, 'w') as f:
            json.dump(record, f, indent=2)
        logger.info(f"Deployment record written to {file_path}")
