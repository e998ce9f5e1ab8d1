"""
Compiled contract artifacts.

Artifacts are the JSON files a Solidity toolchain writes after compilation,
one per contract, named after the contract (``Kake2.json``). The registry
resolves a contract name to its artifact the first time it is asked for.
"""

import os
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List

logger = logging.getLogger(__name__)

DEFAULT_BUILD_DIR = os.path.join("build", "contracts")


class ArtifactError(Exception):
    """Raised when an artifact file cannot be used for deployment."""


@dataclass(frozen=True)
class Artifact:
    contract_name: str
    abi: List[Dict[str, Any]]
    bytecode: str


def _extract_bytecode(data: Dict[str, Any]) -> str:
    # Foundry nests the creation code under "object"
    bytecode = data.get('bytecode')
    if isinstance(bytecode, dict):
        bytecode = bytecode.get('object')
    return bytecode or ""


def load_artifact(file_path: str) -> Artifact:
    """Loads a contract artifact (ABI and creation bytecode) from its JSON file."""
    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ArtifactError(f"Artifact file not found: {file_path}") from e
    except ValueError as e:
        raise ArtifactError(f"Artifact file is not valid JSON: {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ArtifactError(f"Artifact {file_path} is not a JSON object")

    if 'abi' not in data:
        raise ArtifactError(f"Artifact {file_path} has no ABI")

    name = data.get('contractName') or os.path.splitext(os.path.basename(file_path))[0]
    bytecode = _extract_bytecode(data)
    if bytecode in ("", "0x"):
        raise ArtifactError(f"Artifact {name} has no bytecode; abstract contracts "
                            "and interfaces cannot be deployed")

    return Artifact(contract_name=name, abi=data['abi'], bytecode=bytecode)


class ArtifactRegistry(Mapping):
    """Read-only mapping from contract name to its artifact in ``build_dir``."""

    def __init__(self, build_dir: str = DEFAULT_BUILD_DIR):
        self.build_dir = build_dir
        self._cache: Dict[str, Artifact] = {}

    def _path(self, name: str) -> str:
        return os.path.join(self.build_dir, f"{name}.json")

    def __getitem__(self, name: str) -> Artifact:
        if name in self._cache:
            return self._cache[name]

        path = self._path(name)
        if not os.path.isfile(path):
            raise KeyError(name)

        artifact = load_artifact(path)
        logger.info(f"Loaded artifact {name} from {path}")
        self._cache[name] = artifact
        return artifact

    def __iter__(self) -> Iterator[str]:
        if not os.path.isdir(self.build_dir):
            return iter(())
        names = sorted(
            os.path.splitext(entry)[0]
            for entry in os.listdir(self.build_dir)
            if entry.endswith('.json')
        )
        return iter(names)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and (name in self._cache or os.path.isfile(self._path(name)))
