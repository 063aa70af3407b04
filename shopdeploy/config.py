#!/usr/bin/env python3
"""
Configuration module for shopdeploy.
Holds the compiler version and the per-network RPC endpoints and signing keys.
Values come from environment variables (optionally loaded from a .env file)
and are frozen into a DeploymentConfig once, at process start.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

# Solidity compiler version the contracts are built with
SOLIDITY_VERSION = "0.8.28"

# Environment variable names and default endpoint per network
# Structure: NETWORKS[network] = {"url_env", "key_env", "default_url"}
NETWORKS: Dict[str, Dict[str, str]] = {
    "sepolia": {
        "url_env": "SEPOLIA_RPC_URL",
        "key_env": "SEPOLIA_PRIVATE_KEY",
        "default_url": "",
    },
    "localhost": {
        "url_env": "LOCALHOST_RPC_URL",
        "key_env": "LOCALHOST_PRIVATE_KEY",
        "default_url": "http://127.0.0.1:8545",
    },
}

DEFAULT_NETWORK = "sepolia"
DEFAULT_CONFIRMATION_TIMEOUT = 120.0
DEFAULT_POLL_LATENCY = 0.1

# Hardhat project layout
DEFAULT_SOURCES_DIR = Path("contracts")
DEFAULT_ARTIFACTS_DIR = Path("artifacts")


def get_env(key: str, default: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Get environment variable with fallback to default."""
    if environ is None:
        environ = os.environ
    return environ.get(key, default)


@dataclass(frozen=True)
class NetworkConfig:
    """RPC endpoint and signing credentials for one network."""
    name: str
    url: str
    accounts: Tuple[str, ...] = ()

    def __repr__(self) -> str:
        # Never print private keys
        return f"NetworkConfig(name={self.name!r}, url={self.url!r}, accounts=<{len(self.accounts)} key(s)>)"


@dataclass(frozen=True)
class DeploymentConfig:
    """Everything a deployment run needs, built once and never mutated."""
    network: NetworkConfig
    solidity_version: str = SOLIDITY_VERSION
    sources_dir: Path = DEFAULT_SOURCES_DIR
    artifacts_dir: Path = DEFAULT_ARTIFACTS_DIR
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    poll_latency: float = DEFAULT_POLL_LATENCY


def list_networks() -> list[str]:
    """List all available network names."""
    return list(NETWORKS.keys())


def get_network_config(network: str, environ: Optional[Mapping[str, str]] = None) -> NetworkConfig:
    """
    Build the configuration for a network from the environment.

    Args:
        network: Network name (e.g., "sepolia", "localhost")
        environ: Mapping to read variables from (defaults to os.environ)

    Returns:
        NetworkConfig with the endpoint URL and, when the private key variable
        is set and non-empty, a single signing credential

    Raises:
        ValueError: If the network is not known
    """
    settings = NETWORKS.get(network.lower())
    if settings is None:
        raise ValueError(f"Unknown network {network!r}. Available: {', '.join(list_networks())}")

    url = get_env(settings["url_env"], settings["default_url"], environ)
    private_key = get_env(settings["key_env"], "", environ)
    accounts = (private_key,) if private_key else ()

    return NetworkConfig(name=network.lower(), url=url, accounts=accounts)


def _get_float(key: str, default: float, environ: Optional[Mapping[str, str]]) -> float:
    raw = get_env(key, "", environ)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {raw!r}")
    return value


def load_config(
    network: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    confirmation_timeout: Optional[float] = None,
    sources_dir: Optional[Path] = None,
    artifacts_dir: Optional[Path] = None,
) -> DeploymentConfig:
    """
    Build the deployment configuration.

    Explicit arguments win over environment variables, which win over the
    built-in defaults.
    """
    if network is None:
        network = get_env("DEPLOY_NETWORK", DEFAULT_NETWORK, environ)

    if confirmation_timeout is None:
        confirmation_timeout = _get_float("DEPLOY_CONFIRMATION_TIMEOUT", DEFAULT_CONFIRMATION_TIMEOUT, environ)
    elif confirmation_timeout <= 0:
        raise ValueError("Confirmation timeout must be positive")

    return DeploymentConfig(
        network=get_network_config(network, environ),
        confirmation_timeout=confirmation_timeout,
        poll_latency=_get_float("DEPLOY_POLL_LATENCY", DEFAULT_POLL_LATENCY, environ),
        sources_dir=sources_dir or DEFAULT_SOURCES_DIR,
        artifacts_dir=artifacts_dir or DEFAULT_ARTIFACTS_DIR,
    )
