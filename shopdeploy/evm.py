"""EVM blockchain operations."""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Sequence, Tuple

from eth_account import Account
from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import (
    ContractLogicError,
    ProviderConnectionError,
    TimeExhausted,
    Web3RPCError,
)

from shopdeploy import config, utils
from shopdeploy.artifacts import ContractArtifact
from shopdeploy.config import NetworkConfig
from shopdeploy.errors import (
    ContractExecutionError,
    DeploymentError,
    NetworkError,
    SigningError,
)


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise web3 and transport failures as shopdeploy errors."""
    try:
        yield
    except DeploymentError:
        raise
    except ContractLogicError as e:
        raise ContractExecutionError(f"{action} reverted: {e}") from e
    except Web3RPCError as e:
        raise ContractExecutionError(f"{action} rejected by the node: {e}") from e
    except TimeExhausted as e:
        raise NetworkError(f"{action} timed out: {e}") from e
    except (ProviderConnectionError, RequestException, OSError) as e:
        raise NetworkError(f"{action} failed, RPC endpoint unreachable: {e}") from e


def _connect_web3(network_config: NetworkConfig) -> Web3:
    """Return a connected Web3 instance or raise if unreachable."""
    if not network_config.url:
        url_env = config.NETWORKS.get(network_config.name, {}).get("url_env", "the RPC URL")
        raise NetworkError(f"RPC endpoint for {network_config.name} is not configured (set {url_env})")

    w3 = Web3(Web3.HTTPProvider(network_config.url))

    if not w3.is_connected():
        raise NetworkError(f"Failed to connect to RPC endpoint: {network_config.url}")

    return w3


def _get_signer_context(accounts: Sequence[str], network: str) -> Tuple[str, bytes]:
    """
    Resolve the deployer address and private key bytes from the first credential.

    Returns:
        Tuple of (deployer_address, private_key_bytes)
    """
    if not accounts:
        raise SigningError(f"No signing credential configured for network {network}")

    privkey = accounts[0].strip()
    clean_privkey = privkey[2:] if privkey.startswith("0x") else privkey

    try:
        private_key_bytes = bytes.fromhex(clean_privkey)
    except ValueError:
        raise SigningError("Private key must be a hex string.")

    if len(private_key_bytes) != 32:
        raise SigningError("Private key must be 32 bytes (64 hex characters).")

    try:
        account = Account.from_key(private_key_bytes)
    except ValueError as e:
        raise SigningError(f"Invalid private key: {e}")
    return account.address, private_key_bytes


class PendingDeployment:
    """A submitted contract-creation transaction awaiting confirmation."""

    def __init__(self, w3: Web3, contract_name: str, transaction_hash: bytes):
        self.w3 = w3
        self.contract_name = contract_name
        self.transaction_hash = transaction_hash

    @property
    def transaction_hash_hex(self) -> str:
        return Web3.to_hex(self.transaction_hash)

    def wait_for_deployment(
        self,
        timeout: float = config.DEFAULT_CONFIRMATION_TIMEOUT,
        poll_latency: float = config.DEFAULT_POLL_LATENCY,
    ) -> str:
        """
        Block until the deployment is mined and return the contract address.

        Raises:
            NetworkError: If the receipt does not arrive within ``timeout`` seconds
            ContractExecutionError: If the transaction reverted
        """
        with translate_errors(f"Waiting for {self.contract_name} deployment"):
            receipt = self.w3.eth.wait_for_transaction_receipt(
                self.transaction_hash,
                timeout=timeout,
                poll_latency=poll_latency,
            )

        if receipt["status"] != 1:
            raise ContractExecutionError(
                f"{self.contract_name} deployment reverted (transaction {self.transaction_hash_hex}, "
                f"gas used {receipt.get('gasUsed')})"
            )

        address = receipt.get("contractAddress")
        if not address:
            raise ContractExecutionError(
                f"{self.contract_name} deployment receipt has no contract address "
                f"(transaction {self.transaction_hash_hex})"
            )
        return Web3.to_checksum_address(address)


class ContractFactory:
    """Deploys one compiled contract from the client's signing account."""

    def __init__(self, client: "EVMClient", artifact: ContractArtifact):
        self.client = client
        self.artifact = artifact

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    def deploy(self, *constructor_args: Any) -> PendingDeployment:
        """Build, sign and submit the contract-creation transaction."""
        w3 = self.client.w3
        contract = w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)

        with translate_errors(f"Deploying {self.contract_name}"):
            transaction = contract.constructor(*constructor_args).build_transaction(
                self.client.transaction_params()
            )

        raw_transaction = self.client.sign_transaction(transaction)

        with translate_errors(f"Sending {self.contract_name} deployment"):
            tx_hash = w3.eth.send_raw_transaction(raw_transaction)

        pending = PendingDeployment(w3, self.contract_name, tx_hash)
        utils.info(f"{self.contract_name} deployment sent: {pending.transaction_hash_hex}")
        return pending


class EVMClient:
    """EVM blockchain client that owns the RPC connection and the deployer key."""

    def __init__(self, network_config: NetworkConfig, w3: Optional[Web3] = None):
        """
        Initialize the client for a configured network.

        The signing credential is checked before any connection is made, so a
        missing key fails without touching the network.

        Args:
            network_config: Endpoint and credentials of the target network
            w3: Pre-built Web3 instance (tests, custom providers)
        """
        self.network = network_config.name
        self.deployer_address, self._private_key_bytes = _get_signer_context(
            network_config.accounts, network_config.name
        )
        self.w3 = w3 if w3 is not None else _connect_web3(network_config)
        self._chain_id: Optional[int] = None

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            with translate_errors("Fetching chain ID"):
                self._chain_id = self.w3.eth.chain_id
        return self._chain_id

    def transaction_params(self) -> Dict[str, Any]:
        """Base parameters for a transaction sent by the deployer; web3 fills in gas and fees."""
        with translate_errors("Fetching deployer nonce"):
            nonce = self.w3.eth.get_transaction_count(self.deployer_address, "pending")
        return {
            "from": self.deployer_address,
            "nonce": nonce,
            "chainId": self.chain_id,
        }

    def sign_transaction(self, transaction: Dict[str, Any]) -> bytes:
        """Sign a transaction dictionary locally and return the raw bytes."""
        try:
            signed_txn = self.w3.eth.account.sign_transaction(transaction, self._private_key_bytes)
        except (TypeError, ValueError) as e:
            raise SigningError(f"Failed to sign transaction: {e}")
        return signed_txn.raw_transaction

    def get_contract_factory(self, artifact: ContractArtifact) -> ContractFactory:
        """Return a factory that deploys the given compiled contract."""
        return ContractFactory(self, artifact)
