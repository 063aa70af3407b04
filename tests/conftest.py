import pytest

from shopdeploy.artifacts import ContractArtifact, write_artifact
from shopdeploy.config import DeploymentConfig, NetworkConfig

# First Hardhat development account; never holds real funds
HARDHAT_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TOKEN_ABI = [
    {
        "type": "constructor",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "symbol", "type": "string"},
            {"name": "initialSupplyToOwner", "type": "uint256"},
        ],
    },
]

SHOP_ABI = [
    {
        "type": "constructor",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "tokenAddress", "type": "address"}],
    },
]


@pytest.fixture
def artifacts_dir(tmp_path):
    path = tmp_path / "artifacts"
    write_artifact(path, ContractArtifact("MyToken", "contracts/MyToken.sol", TOKEN_ABI, "0x6080"))
    write_artifact(path, ContractArtifact("Shop", "contracts/Shop.sol", SHOP_ABI, "0x6081"))
    return path


@pytest.fixture
def network_config():
    return NetworkConfig(name="localhost", url="http://127.0.0.1:8545", accounts=(HARDHAT_KEY,))


@pytest.fixture
def deploy_config(network_config, artifacts_dir):
    return DeploymentConfig(network=network_config, artifacts_dir=artifacts_dir, confirmation_timeout=5)
