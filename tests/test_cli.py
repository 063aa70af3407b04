import json

import pytest

from shopdeploy import cli
from shopdeploy.models import DeploymentRecord, DeploymentResult

from conftest import HARDHAT_KEY


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    for name in ("SEPOLIA_RPC_URL", "SEPOLIA_PRIVATE_KEY", "DEPLOY_NETWORK", "DEPLOY_CONFIRMATION_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def fake_result():
    token = DeploymentRecord("MyToken", ("MyUserCoin", "MUC", 10**24), "0xaa", "0x" + "01" * 20)
    shop = DeploymentRecord("Shop", ("0x" + "01" * 20,), "0xbb", "0x" + "02" * 20)
    return DeploymentResult(network="sepolia", chain_id=11155111, token=token, shop=shop)


def test_missing_credentials_exit_code(monkeypatch, capsys):
    monkeypatch.setenv("SEPOLIA_RPC_URL", "https://rpc.example")
    deployments = []
    monkeypatch.setattr(cli, "run_deployment", lambda *args: deployments.append(args))

    assert cli.main(["--network", "sepolia", "--no-compile"]) == 1
    assert deployments == []
    assert "No signing credential configured for network sepolia" in capsys.readouterr().err


def test_missing_endpoint_exit_code(monkeypatch, capsys):
    monkeypatch.setenv("SEPOLIA_PRIVATE_KEY", HARDHAT_KEY)

    assert cli.main(["--network", "sepolia", "--no-compile"]) == 1
    assert "SEPOLIA_RPC_URL" in capsys.readouterr().err


def test_success_writes_output(monkeypatch, tmp_path):
    created = []

    class FakeClient:
        deployer_address = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

        def __init__(self, network_config):
            created.append(network_config)

    monkeypatch.setenv("SEPOLIA_RPC_URL", "https://rpc.example")
    monkeypatch.setenv("SEPOLIA_PRIVATE_KEY", HARDHAT_KEY)
    monkeypatch.setattr(cli, "EVMClient", FakeClient)
    monkeypatch.setattr(cli, "run_deployment", lambda deploy_config, client: fake_result())

    output = tmp_path / "deployments" / "sepolia.json"
    assert cli.main(["--no-compile", "--timeout", "30", "--output", str(output)]) == 0

    assert created[0].url == "https://rpc.example"
    data = json.loads(output.read_text())
    assert data["contracts"]["MyToken"]["address"] == "0x" + "01" * 20
    assert data["contracts"]["Shop"]["constructor_args"] == ["0x" + "01" * 20]


def test_compiles_when_sources_exist(monkeypatch, tmp_path):
    (tmp_path / "contracts").mkdir()
    compiled = []
    monkeypatch.setattr(cli.compiler, "compile_contracts", lambda *args: compiled.append(args))
    monkeypatch.setenv("SEPOLIA_RPC_URL", "https://rpc.example")

    # fails on the missing key, after compiling
    assert cli.main([]) == 1
    assert compiled and compiled[0][2] == "0.8.28"


def test_invalid_timeout_is_reported(capsys):
    assert cli.main(["--no-compile", "--timeout", "0"]) == 1
    assert "timeout" in capsys.readouterr().err


def test_list_networks(capsys):
    assert cli.main(["--list-networks"]) == 0
    out = capsys.readouterr().out
    assert "sepolia" in out and "SEPOLIA_RPC_URL" in out
