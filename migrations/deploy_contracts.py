#!/usr/bin/env python3
"""
Kake2 / Kake3 deployment migration.

``configure`` is the migration itself: it asks the deployment context for
one Kake2 and one Kake3 with fixed address arguments. ``main`` runs it
against a live node with a :class:`~migrations.deployer.Web3Deployer`.
"""

import os
import sys
import logging
import argparse
from typing import Any, Mapping, Optional, Sequence

from dotenv import load_dotenv

from .addresses import ADDR1, ADDR2, ADDR3, DEFAULT_ADDRESSES, check_addresses
from .artifacts import DEFAULT_BUILD_DIR, ArtifactRegistry
from .deployer import Web3Deployer, connect

logger = logging.getLogger(__name__)


def configure(deployer: Any, artifacts: Mapping[str, Any],
              addr1: str = ADDR1, addr2: str = ADDR2, addr3: str = ADDR3) -> None:
    deployer.deploy(artifacts["Kake2"], addr1, addr2)
    deployer.deploy(artifacts["Kake3"], addr1, addr2, addr3)


def _setup_logging():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('deployment.log'),
            logging.StreamHandler()
        ]
    )


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Deploy the Kake2 and Kake3 contracts")
    parser.add_argument("--rpc-url", default=os.getenv("RPC_URL", "http://localhost:8545"),
                        help="JSON-RPC endpoint of the target node")
    parser.add_argument("--build-dir", default=os.getenv("BUILD_DIR", DEFAULT_BUILD_DIR),
                        help="directory holding the compiled contract artifacts")
    parser.add_argument("--output", default=os.getenv("DEPLOYMENT_FILE", "deployment.json"),
                        help="file the deployed addresses are written to")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    _setup_logging()

    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        logger.error("PRIVATE_KEY not found in environment")
        return 1

    gas_limit = os.getenv("GAS_LIMIT")

    check_addresses(DEFAULT_ADDRESSES)

    try:
        w3 = connect(args.rpc_url)
        deployer = Web3Deployer(w3, private_key, gas_limit=int(gas_limit) if gas_limit else None)
    except Exception as e:
        logger.error(f"Failed to initialize deployer: {e}")
        return 1

    status = 0
    try:
        configure(deployer, ArtifactRegistry(args.build_dir))
    except Exception as e:
        logger.error(f"Migration failed: {e}")
        status = 1

    # Keep the addresses of whatever made it on-chain, even after a failure
    if deployer.deployments:
        deployer.save(args.output)
    for name, address in deployer.addresses().items():
        logger.info(f"{name}: {address}")
    return status


if __name__ == "__main__":
    sys.exit(main())
