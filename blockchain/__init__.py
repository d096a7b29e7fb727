"""
Blockchain Interaction Package
Handles network configuration, contract artifacts and deployment
"""

from .exceptions import (
    DeploymentFailure,
    NetworkConfigError,
    ArtifactError,
    ArtifactNotFoundError,
    DeploymentError
)
from .network import NetworkConfig, load_network_config, connect
from .contract_factory import (
    ContractArtifact,
    ContractFactory,
    DeployedContract,
    get_contract_factory,
    load_artifact
)

__all__ = [
    'DeploymentFailure',
    'NetworkConfig',
    'NetworkConfigError',
    'load_network_config',
    'connect',
    'ArtifactError',
    'ArtifactNotFoundError',
    'ContractArtifact',
    'ContractFactory',
    'DeployedContract',
    'DeploymentError',
    'get_contract_factory',
    'load_artifact'
]
