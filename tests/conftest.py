"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests.
"""

from typing import Any, Callable, Dict, List
from unittest.mock import MagicMock

import httpx
import pytest

from polymer_toolkit.proofs.client import ProofServiceClient

API_URL = "https://proof.testnet.polymer.zone"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the developer's environment and config file out of tests."""
    for key in (
        "POLYMER_API_KEY",
        "POLYMER_API_URL",
        "POLYMER_DEBUG",
        "POLYMER_MAX_ATTEMPTS",
        "POLYMER_INTERVAL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(
        "polymer_toolkit.shared.config.DEFAULT_CONFIG_FILE",
        tmp_path / "missing.env",
    )


@pytest.fixture
def sample_tx_hash() -> str:
    """Sample transaction hash for tests."""
    return "0x" + "ab" * 32


@pytest.fixture
def transfer_topic() -> str:
    """keccak256("Transfer(address,address,uint256)")."""
    return "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


@pytest.fixture
def sample_transaction(sample_tx_hash) -> Dict[str, Any]:
    """eth_getTransactionByHash result."""
    return {
        "hash": sample_tx_hash,
        "blockNumber": "0x1036640",
        "blockHash": "0x" + "cd" * 32,
        "from": "0x52f541764E6e90eeBc5c21Ff570De0e2D63766B6",
        "to": "0x7E1444BA99dcdFfE8fBdb42C02fb0DA4AAAcE4d5",
        "chainId": "0xaa36a7",
    }


@pytest.fixture
def make_receipt(sample_tx_hash) -> Callable[[List[List[str]]], Dict[str, Any]]:
    """Build an eth_getTransactionReceipt result from per-log topic lists."""

    def _make(topics_per_log: List[List[str]]) -> Dict[str, Any]:
        return {
            "transactionHash": sample_tx_hash,
            "transactionIndex": "0x5",
            "blockNumber": "0x1036640",
            "blockHash": "0x" + "cd" * 32,
            "status": "0x1",
            "logs": [
                {
                    "logIndex": hex(10 + i),
                    "transactionIndex": "0x5",
                    "address": "0x7E1444BA99dcdFfE8fBdb42C02fb0DA4AAAcE4d5",
                    "data": "0x",
                    "topics": topics,
                }
                for i, topics in enumerate(topics_per_log)
            ],
        }

    return _make


@pytest.fixture
def mock_web3():
    """Mock Web3 whose provider answers from a method -> response map."""
    w3 = MagicMock()
    w3.responses = {}

    def make_request(method, params):
        return w3.responses[method]

    w3.provider.make_request.side_effect = make_request
    return w3


@pytest.fixture
def make_proof_client():
    """Build a ProofServiceClient backed by an httpx.MockTransport handler."""
    clients = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        return ProofServiceClient("test-key", API_URL, http_client=http_client)

    yield _make

    for http_client in clients:
        http_client.close()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
