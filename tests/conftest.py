"""
Shared fixtures
"""

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks bound to captured streams after each test"""
    yield
    logger.remove()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove deployment settings that a local .env may have exported"""
    for var in (
        'DEPLOY_NETWORK',
        'DEPLOYER_PRIVATE_KEY',
        'ARTIFACTS_DIR',
        'RECEIPT_TIMEOUT',
        'DEPLOY_LOG_FILE',
        'LOCALHOST_RPC_URL',
        'SEPOLIA_RPC_URL',
        'KOVAN_RPC_URL'
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
