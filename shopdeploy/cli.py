"""Command line interface for shopdeploy."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from shopdeploy import compiler, config, utils
from shopdeploy.deployer import run_deployment
from shopdeploy.evm import EVMClient
from shopdeploy.models import DeploymentResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shopdeploy",
        description="Compile and deploy MyToken and Shop",
    )
    parser.add_argument(
        "--network",
        choices=config.list_networks(),
        help=f"Target network (default: $DEPLOY_NETWORK or {config.DEFAULT_NETWORK})",
    )
    parser.add_argument(
        "--no-compile",
        action="store_true",
        help="Use existing artifacts instead of compiling the contracts first",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for each deployment to be confirmed",
    )
    parser.add_argument(
        "--contracts",
        type=Path,
        default=config.DEFAULT_SOURCES_DIR,
        help="Directory with the Solidity sources",
    )
    parser.add_argument(
        "--artifacts",
        type=Path,
        default=config.DEFAULT_ARTIFACTS_DIR,
        help="Directory for compiled artifacts",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the deployed addresses to this JSON file",
    )
    parser.add_argument(
        "--list-networks",
        action="store_true",
        help="List configured networks and exit",
    )
    return parser


def print_networks() -> None:
    for name in config.list_networks():
        settings = config.NETWORKS[name]
        print(f"{utils.bold(name)}: {settings['url_env']}, {settings['key_env']}")


def write_result(path: Path, result: DeploymentResult) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2)
        f.write("\n")
    utils.info(f"Deployment written to {path}")


def deploy(args: argparse.Namespace) -> DeploymentResult:
    """Load configuration, compile, deploy."""
    deploy_config = config.load_config(
        network=args.network,
        confirmation_timeout=args.timeout,
        sources_dir=args.contracts,
        artifacts_dir=args.artifacts,
    )
    utils.print_banner(deploy_config.network.name)

    utils.section_header("Compile")
    if args.no_compile:
        utils.info("Skipping compilation")
    elif deploy_config.sources_dir.is_dir():
        compiler.compile_contracts(
            deploy_config.sources_dir,
            deploy_config.artifacts_dir,
            deploy_config.solidity_version,
        )
    else:
        utils.warn(f"Sources directory {deploy_config.sources_dir} not found, using existing artifacts")

    utils.section_header("Deploy")
    client = EVMClient(deploy_config.network)
    utils.info(f"Deployer: {client.deployer_address}")

    result = run_deployment(deploy_config, client)

    if args.output:
        write_result(args.output, result)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    if args.list_networks:
        print_networks()
        return 0

    load_dotenv()

    try:
        deploy(args)
    except Exception as e:
        utils.error(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
