"""
Contract Factory
Looks up compiled contract artifacts by name and deploys new instances
"""

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from web3 import Web3
from eth_account import Account
from loguru import logger

from .exceptions import ArtifactError, ArtifactNotFoundError, DeploymentError
from .network import NetworkConfig, load_network_config, connect


@dataclass
class ContractArtifact:
    """ABI and creation bytecode of a compiled contract"""

    contract_name: str
    abi: List[Dict]
    bytecode: str
    source_path: Optional[Path] = None

    @property
    def is_deployable(self) -> bool:
        return self.bytecode not in ('', '0x')


@dataclass
class DeployedContract:
    """Result of a confirmed deployment"""

    address: str
    transaction_hash: str
    receipt: Any = field(repr=False)
    contract: Any = field(repr=False)


def load_artifact(contract_name: str, artifacts_dir="artifacts") -> ContractArtifact:
    """
    Load a Hardhat-style artifact (<artifacts_dir>/**/<Name>.json)

    Args:
        contract_name: Contract name, e.g. "PriceConsumer"
        artifacts_dir: Root directory of the compiler output

    Returns:
        ContractArtifact
    """
    root = Path(artifacts_dir)
    matches = sorted(
        path for path in root.rglob(f"{contract_name}.json")
        if 'build-info' not in path.parts
    )

    if not matches:
        raise ArtifactNotFoundError(
            f"Artifact for contract '{contract_name}' not found in {root}"
        )

    if len(matches) > 1:
        paths = ', '.join(str(path) for path in matches)
        raise ArtifactNotFoundError(
            f"Multiple artifacts for contract '{contract_name}': {paths}"
        )

    path = matches[0]
    logger.debug(f"Loading artifact {path}")

    try:
        with open(path, 'r') as f:
            contract_json = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ArtifactError(f"Cannot read artifact {path}: {e}") from e

    try:
        abi = contract_json['abi']
        bytecode = contract_json['bytecode']
    except (KeyError, TypeError) as e:
        raise ArtifactError(f"Artifact {path} is missing {e}") from e

    # Foundry stores {"object": "0x..."}
    if isinstance(bytecode, dict):
        bytecode = bytecode.get('object', '')

    return ContractArtifact(
        contract_name=contract_json.get('contractName', contract_name),
        abi=abi,
        bytecode=bytecode,
        source_path=path
    )


class ContractFactory:
    """
    Deploys instances of one contract artifact
    """

    def __init__(
        self,
        w3: Web3,
        artifact: ContractArtifact,
        private_key: str = None,
        receipt_timeout: float = 120
    ):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            artifact: Compiled contract
            private_key: Deployer key; the node's first unlocked account is used if None
            receipt_timeout: Seconds to wait for the deployment receipt
        """
        self.w3 = w3
        self.artifact = artifact
        self.account = Account.from_key(private_key) if private_key else None
        self.receipt_timeout = receipt_timeout

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    @property
    def deployer_address(self) -> str:
        if self.account is not None:
            return self.account.address

        accounts = self.w3.eth.accounts
        if not accounts:
            raise DeploymentError(
                "No DEPLOYER_PRIVATE_KEY set and the node exposes no unlocked accounts"
            )
        return accounts[0]

    async def deploy(self, *constructor_args) -> DeployedContract:
        """
        Deploy a new instance and wait for it to be mined

        Args:
            constructor_args: Arguments passed to the contract constructor

        Returns:
            DeployedContract
        """
        if not self.artifact.is_deployable:
            raise DeploymentError(
                f"{self.contract_name} has no bytecode (abstract contract or interface?)"
            )

        Contract = self.w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)
        constructor = Contract.constructor(*constructor_args)
        sender = self.deployer_address

        logger.debug(f"Deploying {self.contract_name} from {sender}")

        if self.account is not None:
            # Gas and fee fields are filled in by web3
            transaction = constructor.build_transaction({
                'from': sender,
                'nonce': self.w3.eth.get_transaction_count(sender)
            })
            signed_tx = self.account.sign_transaction(transaction)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            tx_hash = constructor.transact({'from': sender})

        tx_hex = Web3.to_hex(tx_hash)
        logger.debug(f"Deployment transaction sent: {tx_hex}")

        # Blocking poll runs off the event loop
        receipt = await asyncio.to_thread(
            self.w3.eth.wait_for_transaction_receipt,
            tx_hash,
            timeout=self.receipt_timeout
        )

        if receipt['status'] != 1:
            raise DeploymentError(f"Deployment of {self.contract_name} reverted (tx {tx_hex})")

        address = Web3.to_checksum_address(receipt['contractAddress'])
        logger.debug(f"Gas used: {receipt['gasUsed']}")

        return DeployedContract(
            address=address,
            transaction_hash=tx_hex,
            receipt=receipt,
            contract=self.attach(address)
        )

    def attach(self, address: str):
        """Contract instance bound to an existing deployment"""
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=self.artifact.abi
        )


async def get_contract_factory(
    contract_name: str,
    network: NetworkConfig = None,
    w3: Web3 = None
) -> ContractFactory:
    """
    Resolve a factory for a named contract

    Args:
        contract_name: Artifact name
        network: Target network (read from the environment if None)
        w3: Existing connection (opened from network if None)

    Returns:
        ContractFactory
    """
    network = network or load_network_config()
    artifact = load_artifact(contract_name, network.artifacts_dir)

    if w3 is None:
        w3 = connect(network)

    return ContractFactory(
        w3,
        artifact,
        private_key=network.private_key,
        receipt_timeout=network.receipt_timeout
    )
