"""Solidity compilation through py-solc-x."""

from pathlib import Path
from typing import Any, Dict, List

import solcx
from solcx.exceptions import (
    DownloadError,
    SolcError,
    SolcInstallationError,
    UnsupportedVersionError,
)

from shopdeploy import utils
from shopdeploy.artifacts import ContractArtifact, write_artifact
from shopdeploy.errors import CompilationError

REMAPPINGS = ["@openzeppelin/=node_modules/@openzeppelin/"]

OUTPUT_SELECTION = ["abi", "evm.bytecode.object", "evm.deployedBytecode.object"]


def ensure_solc(version: str) -> None:
    """Install the requested solc version unless it is already available."""
    installed = {str(v) for v in solcx.get_installed_solc_versions()}
    if version in installed:
        return
    utils.info(f"Installing solc {version}...")
    try:
        solcx.install_solc(version)
    except (DownloadError, SolcInstallationError, UnsupportedVersionError, OSError) as e:
        raise CompilationError(f"Failed to install solc {version}: {e}")


def collect_sources(sources_dir: Path) -> Dict[str, Dict[str, str]]:
    """Read every .sol file under sources_dir, keyed by project-relative path."""
    sources_dir = Path(sources_dir)
    project_root = sources_dir.resolve().parent
    sources = {}
    for path in sorted(sources_dir.resolve().rglob("*.sol")):
        source_name = path.relative_to(project_root).as_posix()
        sources[source_name] = {"content": path.read_text(encoding="utf-8")}
    return sources


def build_input(sources: Dict[str, Dict[str, str]]) -> Dict[str, Any]:
    """Build the solc standard-JSON input."""
    return {
        "language": "Solidity",
        "sources": sources,
        "settings": {
            "optimizer": {"enabled": False, "runs": 200},
            "remappings": REMAPPINGS,
            "outputSelection": {"*": {"*": OUTPUT_SELECTION}},
        },
    }


def compile_contracts(sources_dir: Path, artifacts_dir: Path, solc_version: str) -> List[ContractArtifact]:
    """
    Compile all Solidity sources and write one artifact per contract.

    Args:
        sources_dir: Directory holding the .sol files (usually "contracts")
        artifacts_dir: Directory to write Hardhat-style artifacts into
        solc_version: Exact compiler version, e.g. "0.8.28"

    Returns:
        The artifacts written, in source order

    Raises:
        CompilationError: If solc cannot be installed or reports errors
    """
    sources = collect_sources(sources_dir)
    if not sources:
        utils.warn(f"No Solidity sources found in {sources_dir}")
        return []

    ensure_solc(solc_version)
    project_root = Path(sources_dir).resolve().parent

    utils.info(f"Compiling {len(sources)} file(s) with solc {solc_version}...")
    try:
        output = solcx.compile_standard(
            build_input(sources),
            solc_version=solc_version,
            base_path=str(project_root),
            allow_paths=[str(project_root)],
        )
    except SolcError as e:
        raise CompilationError(f"Compilation failed: {e}")

    for message in output.get("errors", []):
        if message.get("severity") == "warning":
            utils.warn(message.get("formattedMessage", message.get("message", "")).strip())

    written = []
    for source_name, contracts in output.get("contracts", {}).items():
        # Only emit artifacts for our own sources, not imported libraries
        if source_name not in sources:
            continue
        for contract_name, compiled in contracts.items():
            evm = compiled.get("evm", {})
            artifact = ContractArtifact(
                contract_name=contract_name,
                source_name=source_name,
                abi=compiled.get("abi", []),
                bytecode="0x" + evm.get("bytecode", {}).get("object", ""),
            )
            deployed = "0x" + evm.get("deployedBytecode", {}).get("object", "")
            write_artifact(artifacts_dir, artifact, deployed_bytecode=deployed)
            written.append(artifact)

    utils.success(f"Compiled {len(written)} contract(s) into {artifacts_dir}")
    return written
