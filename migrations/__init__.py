"""
Kake Contract Migrations
========================

Deployment scripts for the Kake contracts.

Structure:
- addresses: constructor address literals and format checks
- artifacts: compiled contract artifact loading
- deployer: web3 deployment context
- deploy_contracts: the Kake2/Kake3 migration and its command-line entry point
"""

__version__ = "1.0.0"
__author__ = "Kake Team"
