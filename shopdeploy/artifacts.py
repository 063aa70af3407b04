"""Loading compiled contract artifacts in Hardhat's on-disk format."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from shopdeploy.errors import ArtifactError

ARTIFACT_FORMAT = "hh-sol-artifact-1"


@dataclass(frozen=True)
class ContractArtifact:
    """ABI and creation bytecode of a compiled contract."""
    contract_name: str
    source_name: str
    abi: List[Dict[str, Any]]
    bytecode: str


def artifact_path(artifacts_dir: Path, source_name: str, contract_name: str) -> Path:
    """Return where Hardhat keeps the artifact, e.g. artifacts/contracts/Shop.sol/Shop.json."""
    return Path(artifacts_dir) / source_name / f"{contract_name}.json"


def find_artifact(artifacts_dir: Path, contract_name: str) -> Path:
    """
    Locate the artifact file for a contract by name.

    Raises:
        ArtifactError: If no artifact or more than one artifact matches
    """
    artifacts_dir = Path(artifacts_dir)
    if not artifacts_dir.is_dir():
        raise ArtifactError(f"Artifacts directory not found: {artifacts_dir}. Compile the contracts first.")

    matches = sorted(
        path for path in artifacts_dir.rglob(f"{contract_name}.json")
        # build-info and debug files live next to the real artifacts
        if not path.name.endswith(".dbg.json") and "build-info" not in path.parts
    )
    if not matches:
        raise ArtifactError(f"Artifact for contract {contract_name!r} not found in {artifacts_dir}")
    if len(matches) > 1:
        found = ", ".join(str(path) for path in matches)
        raise ArtifactError(f"Multiple artifacts found for contract {contract_name!r}: {found}")
    return matches[0]


def load_artifact(artifacts_dir: Path, contract_name: str) -> ContractArtifact:
    """Read a contract's ABI and bytecode."""
    path = find_artifact(artifacts_dir, contract_name)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ArtifactError(f"Failed to read artifact {path}: {e}")

    abi = data.get("abi")
    bytecode = data.get("bytecode") or ""
    if not isinstance(abi, list):
        raise ArtifactError(f"Artifact {path} has no ABI")
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if bytecode == "0x":
        raise ArtifactError(
            f"Artifact {path} has no bytecode; {contract_name} is abstract or an interface"
        )

    return ContractArtifact(
        contract_name=data.get("contractName", contract_name),
        source_name=data.get("sourceName", ""),
        abi=abi,
        bytecode=bytecode,
    )


def write_artifact(artifacts_dir: Path, artifact: ContractArtifact, deployed_bytecode: str = "0x") -> Path:
    """Write an artifact where Hardhat (and load_artifact) expects it."""
    path = artifact_path(artifacts_dir, artifact.source_name, artifact.contract_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "_format": ARTIFACT_FORMAT,
        "contractName": artifact.contract_name,
        "sourceName": artifact.source_name,
        "abi": artifact.abi,
        "bytecode": artifact.bytecode,
        "deployedBytecode": deployed_bytecode,
        "linkReferences": {},
        "deployedLinkReferences": {},
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    return path
