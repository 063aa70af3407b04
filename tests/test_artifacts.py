import json

import pytest

from shopdeploy.artifacts import ContractArtifact, load_artifact, write_artifact
from shopdeploy.errors import ArtifactError


def test_load_artifact(artifacts_dir):
    artifact = load_artifact(artifacts_dir, "MyToken")
    assert artifact.contract_name == "MyToken"
    assert artifact.source_name == "contracts/MyToken.sol"
    assert artifact.bytecode == "0x6080"
    assert artifact.abi[0]["type"] == "constructor"
    assert (artifacts_dir / "contracts" / "MyToken.sol" / "MyToken.json").is_file()


def test_debug_files_are_ignored(artifacts_dir):
    dbg = artifacts_dir / "contracts" / "Shop.sol" / "Shop.dbg.json"
    dbg.write_text(json.dumps({"buildInfo": "../../build-info/x.json"}))
    assert load_artifact(artifacts_dir, "Shop").bytecode == "0x6081"


def test_missing_directory(tmp_path):
    with pytest.raises(ArtifactError, match="Compile the contracts first"):
        load_artifact(tmp_path / "nope", "MyToken")


def test_missing_contract(artifacts_dir):
    with pytest.raises(ArtifactError, match="not found"):
        load_artifact(artifacts_dir, "Vault")


def test_ambiguous_contract(artifacts_dir):
    write_artifact(artifacts_dir, ContractArtifact("Shop", "contracts/legacy/Shop.sol", [], "0x60"))
    with pytest.raises(ArtifactError, match="Multiple artifacts"):
        load_artifact(artifacts_dir, "Shop")


def test_interface_has_no_bytecode(artifacts_dir):
    write_artifact(artifacts_dir, ContractArtifact("IShop", "contracts/IShop.sol", [], "0x"))
    with pytest.raises(ArtifactError, match="abstract or an interface"):
        load_artifact(artifacts_dir, "IShop")


def test_bytecode_without_prefix(tmp_path):
    path = tmp_path / "contracts" / "A.sol" / "A.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"contractName": "A", "abi": [], "bytecode": "6080"}))
    assert load_artifact(tmp_path, "A").bytecode == "0x6080"


def test_corrupt_artifact(tmp_path):
    path = tmp_path / "contracts" / "A.sol" / "A.json"
    path.parent.mkdir(parents=True)
    path.write_text("{not json")
    with pytest.raises(ArtifactError, match="Failed to read"):
        load_artifact(tmp_path, "A")
