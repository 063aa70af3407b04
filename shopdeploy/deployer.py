"""Deployment sequence for MyToken and Shop."""

from typing import Any, Optional

from shopdeploy import utils
from shopdeploy.artifacts import load_artifact
from shopdeploy.config import DeploymentConfig
from shopdeploy.evm import ContractFactory, EVMClient
from shopdeploy.models import (
    DeploymentRecord,
    DeploymentResult,
    DeploymentStage,
    TokenParameters,
)

TOKEN_CONTRACT = "MyToken"
SHOP_CONTRACT = "Shop"


class DeploymentSequencer:
    """
    Deploys MyToken, then Shop with the token's address.

    Steps run strictly in order and the first error aborts the run: the
    stage moves to FAILED and the error propagates unchanged. Shop is never
    submitted unless the token deployment was confirmed.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        client: EVMClient,
        token_parameters: Optional[TokenParameters] = None,
    ) -> None:
        self.config = config
        self.client = client
        self.token_parameters = token_parameters or TokenParameters()
        self.stage = DeploymentStage.START
        self.token: Optional[DeploymentRecord] = None
        self.shop: Optional[DeploymentRecord] = None

    def run(self) -> DeploymentResult:
        """Deploy both contracts and report their addresses."""
        if self.stage is not DeploymentStage.START:
            raise RuntimeError(f"Deployment already ran (stage: {self.stage.value})")

        try:
            token = self.deploy_token()
            shop = self.deploy_shop(token)
        except BaseException:
            self.stage = DeploymentStage.FAILED
            raise

        self.stage = DeploymentStage.DONE
        result = DeploymentResult(
            network=self.config.network.name,
            chain_id=self.client.chain_id,
            token=token,
            shop=shop,
        )
        report(result)
        return result

    def get_contract_factory(self, contract_name: str) -> ContractFactory:
        artifact = load_artifact(self.config.artifacts_dir, contract_name)
        return self.client.get_contract_factory(artifact)

    def deploy_token(self) -> DeploymentRecord:
        """Deploy MyToken with the fixed name, symbol and initial supply."""
        params = self.token_parameters
        factory = self.get_contract_factory(TOKEN_CONTRACT)

        utils.info(
            f"Deploying {TOKEN_CONTRACT} with name={params.name}, symbol={params.symbol}, "
            f"initialSupply={params.display_initial_supply} tokens (raw: {params.raw_initial_supply})..."
        )
        self.stage = DeploymentStage.TOKEN_DEPLOYING
        self.token = self._deploy(factory, *params.constructor_args())
        self.stage = DeploymentStage.TOKEN_CONFIRMED

        utils.success(f"{TOKEN_CONTRACT} deployed to: {self.token.address}")
        return self.token

    def deploy_shop(self, token: DeploymentRecord) -> DeploymentRecord:
        """Deploy Shop pointing at the confirmed token."""
        if self.stage is not DeploymentStage.TOKEN_CONFIRMED or not token.is_confirmed:
            raise RuntimeError(f"{SHOP_CONTRACT} requires a confirmed {TOKEN_CONTRACT} deployment")

        factory = self.get_contract_factory(SHOP_CONTRACT)

        utils.info(f"Deploying {SHOP_CONTRACT} with token={token.address}...")
        self.stage = DeploymentStage.SHOP_DEPLOYING
        self.shop = self._deploy(factory, token.address)
        self.stage = DeploymentStage.SHOP_CONFIRMED

        utils.success(f"{SHOP_CONTRACT} deployed to: {self.shop.address}")
        return self.shop

    def _deploy(self, factory: ContractFactory, *constructor_args: Any) -> DeploymentRecord:
        record = DeploymentRecord(contract_name=factory.contract_name, constructor_args=constructor_args)
        pending = factory.deploy(*constructor_args)
        record.transaction_hash = pending.transaction_hash_hex
        record.confirm(
            pending.wait_for_deployment(
                timeout=self.config.confirmation_timeout,
                poll_latency=self.config.poll_latency,
            )
        )
        return record


def report(result: DeploymentResult) -> None:
    """Print the final addresses."""
    utils.section_footer(utils.bold_green("Deployment successful!"))
    utils.result(f"{result.token.contract_name} address: {result.token.address}")
    utils.result(f"{result.shop.contract_name} address: {result.shop.address}")


def run_deployment(
    config: DeploymentConfig,
    client: EVMClient,
    token_parameters: Optional[TokenParameters] = None,
) -> DeploymentResult:
    """Run the full MyToken then Shop deployment."""
    return DeploymentSequencer(config, client, token_parameters).run()
