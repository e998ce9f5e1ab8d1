"""Address literals passed to the Kake constructors."""

import logging
from typing import Iterable, List

from eth_utils import is_hex_address
from web3 import Web3

logger = logging.getLogger(__name__)

ADDR1 = "0x3dCD7faecD0FC34d2aD171Da01796A2dFD45DF52"
ADDR2 = "0xFf745f1A7259a4160635ac697944D077C0D0EE63"
ADDR3 = "0x21caBd7F5aa6Ad763685157386709449bF09ce99"

DEFAULT_ADDRESSES = (ADDR1, ADDR2, ADDR3)


def check_address(value: str) -> bool:
    """
    Check that a literal looks like a 20-byte hex address.

    Only warns; the literal is never rewritten. A value that is not in
    EIP-55 checksum form gets its own warning, since web3 refuses such
    values as contract arguments.
    """
    if not isinstance(value, str) or not is_hex_address(value):
        logger.warning(f"Address literal {value!r} is not a valid 20-byte hex address")
        return False

    if not Web3.is_checksum_address(value):
        logger.warning(f"Address literal {value} is not in checksum form "
                       f"(expected {Web3.to_checksum_address(value)})")
    return True


def check_addresses(addresses: Iterable[str] = DEFAULT_ADDRESSES) -> List[str]:
    """Return the literals that fail the format check."""
    return [addr for addr in addresses if not check_address(addr)]
