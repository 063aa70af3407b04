"""Data models for shopdeploy."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from shopdeploy.utils import format_units, parse_units


class DeploymentStage(str, Enum):
    """Progress of a deployment run."""
    START = "start"
    TOKEN_DEPLOYING = "token_deploying"
    TOKEN_CONFIRMED = "token_confirmed"
    SHOP_DEPLOYING = "shop_deploying"
    SHOP_CONFIRMED = "shop_confirmed"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (DeploymentStage.DONE, DeploymentStage.FAILED)


@dataclass(frozen=True)
class TokenParameters:
    """Constructor arguments for MyToken."""
    name: str = "MyUserCoin"
    symbol: str = "MUC"
    initial_supply: str = "1000000"
    decimals: int = 18

    @property
    def raw_initial_supply(self) -> int:
        return parse_units(self.initial_supply, self.decimals)

    @property
    def display_initial_supply(self) -> str:
        return format_units(self.raw_initial_supply, self.decimals)

    def constructor_args(self) -> Tuple[str, str, int]:
        return (self.name, self.symbol, self.raw_initial_supply)


@dataclass
class DeploymentRecord:
    """A single contract deployment and, once confirmed, its address."""
    contract_name: str
    constructor_args: Tuple[Any, ...]
    transaction_hash: Optional[str] = None
    address: Optional[str] = None

    @property
    def is_confirmed(self) -> bool:
        return self.address is not None

    def confirm(self, address: str) -> None:
        """Record the confirmed contract address. Only allowed once."""
        if self.address is not None:
            raise ValueError(f"{self.contract_name} is already confirmed at {self.address}")
        self.address = address

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract": self.contract_name,
            # uint256 values do not survive JSON number parsing everywhere
            "constructor_args": [str(arg) if isinstance(arg, int) else arg for arg in self.constructor_args],
            "transaction_hash": self.transaction_hash,
            "address": self.address,
        }


@dataclass
class DeploymentResult:
    """Outcome of a complete run: the token and shop deployments."""
    network: str
    chain_id: Optional[int]
    token: DeploymentRecord
    shop: DeploymentRecord

    def to_dict(self) -> Dict[str, Any]:
        return {
            "network": self.network,
            "chain_id": self.chain_id,
            "contracts": {
                self.token.contract_name: self.token.to_dict(),
                self.shop.contract_name: self.shop.to_dict(),
            },
        }
