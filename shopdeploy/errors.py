"""Exceptions raised while compiling and deploying contracts."""


class DeploymentError(Exception):
    """Base class for every shopdeploy failure."""


class NetworkError(DeploymentError, ConnectionError):
    """The RPC endpoint is unreachable, misconfigured or timed out."""


class SigningError(DeploymentError, ValueError):
    """No usable signing credential is configured for the target network."""


class ContractExecutionError(DeploymentError):
    """A deployment transaction was rejected or reverted on-chain."""


class ArtifactError(DeploymentError):
    """A compiled contract artifact is missing, ambiguous or unusable."""


class CompilationError(DeploymentError):
    """The Solidity compiler failed or reported errors."""
