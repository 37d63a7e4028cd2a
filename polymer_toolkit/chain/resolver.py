"""
Transaction resolution against an Ethereum JSON-RPC node.

Turns a transaction hash, plus an optional log index or event signature,
into the TransactionCoordinates a proof request needs. The node is queried
through web3's HTTPProvider; numeric fields stay hex strings until they are
converted with hex_to_uint64.
"""

from typing import Any, List, Optional

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from polymer_toolkit.shared.exceptions import (
    DecodeError,
    ErrorKind,
    IndexOutOfRangeError,
    MissingChainIDError,
    NoLogsError,
    NoMatchingLogError,
    RemoteError,
    TransactionNotFoundError,
    ValidationError,
)
from polymer_toolkit.shared.logging import get_logger
from polymer_toolkit.shared.types import (
    LogEntry,
    Transaction,
    TransactionCoordinates,
    TransactionReceipt,
)
from polymer_toolkit.utils.hex import (
    event_topic_hash,
    hex_to_uint64,
    normalize_tx_hash,
)

_logger = get_logger(__name__)

RPC_TIMEOUT = 60


class BlockchainResolver:
    """Resolve transaction hashes into proof coordinates."""

    def __init__(self, rpc_url: str, w3: Optional[Web3] = None):
        """
        Initialize the resolver.

        Args:
            rpc_url: HTTP(S) JSON-RPC endpoint of the source chain
            w3: Optional pre-built Web3 instance (mainly for tests)
        """
        self.rpc_url = rpc_url
        self.w3 = w3 or self._initialize_web3(rpc_url)

    def _initialize_web3(self, rpc_url: str) -> Web3:
        """Initialize Web3 with web3's own request retries disabled."""
        provider = Web3.HTTPProvider(
            rpc_url,
            request_kwargs={"timeout": RPC_TIMEOUT},
            exception_retry_configuration=None,
        )
        return Web3(provider)

    def _call(self, method: str, params: List[Any]) -> Any:
        _logger.debug(f"Sending {method} to {self.rpc_url}: {params}")

        try:
            response = self.w3.provider.make_request(method, params)
        except requests.HTTPError as e:
            raise RemoteError(
                f"RPC request failed: {e}",
                kind=ErrorKind.PROTOCOL,
                cause=e,
                operation=method,
                endpoint=self.rpc_url,
            )
        except (requests.RequestException, OSError, Web3Exception) as e:
            raise RemoteError(
                f"failed to send request: {e}",
                kind=ErrorKind.TRANSPORT,
                cause=e,
                operation=method,
                endpoint=self.rpc_url,
            )
        except ValueError as e:
            raise DecodeError(
                f"failed to decode response: {e}",
                cause=e,
                operation=method,
                endpoint=self.rpc_url,
            )

        _logger.debug(f"Response from {method}: {response}")

        if not isinstance(response, dict):
            raise DecodeError(
                f"unexpected response envelope: {response!r}",
                operation=method,
                endpoint=self.rpc_url,
            )

        error = response.get("error")
        if error is not None:
            message = (
                error.get("message", "") if isinstance(error, dict) else error
            )
            raise RemoteError(
                f"RPC returned error: {message}",
                kind=ErrorKind.PROTOCOL,
                operation=method,
                endpoint=self.rpc_url,
            )

        if "result" not in response:
            raise DecodeError(
                "response has neither result nor error",
                operation=method,
                endpoint=self.rpc_url,
            )

        result = response["result"]
        if result is None:
            raise TransactionNotFoundError(
                f"transaction not found: {params[0]}",
                operation=method,
                endpoint=self.rpc_url,
            )
        if not isinstance(result, dict):
            raise DecodeError(
                f"unexpected result type: {type(result).__name__}",
                operation=method,
                endpoint=self.rpc_url,
            )
        return result

    def fetch_transaction(self, tx_hash: str) -> Transaction:
        """Fetch a transaction by hash (eth_getTransactionByHash)."""
        result = self._call("eth_getTransactionByHash", [normalize_tx_hash(tx_hash)])

        chain_id = result.get("chainId")
        if chain_id is not None and not isinstance(chain_id, str):
            raise DecodeError(
                f"invalid chainId in transaction: {chain_id!r}",
                operation="eth_getTransactionByHash",
                endpoint=self.rpc_url,
            )
        return result

    def fetch_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Fetch a transaction receipt (eth_getTransactionReceipt)."""
        method = "eth_getTransactionReceipt"
        result = self._call(method, [normalize_tx_hash(tx_hash)])

        for field in ("blockNumber", "transactionIndex"):
            if not isinstance(result.get(field), str):
                raise DecodeError(
                    f"receipt has no {field}",
                    operation=method,
                    endpoint=self.rpc_url,
                )

        logs = result.get("logs")
        if logs is None:
            result["logs"] = []
        elif not isinstance(logs, list) or not all(
            isinstance(log, dict) and isinstance(log.get("topics", []), list)
            for log in logs
        ):
            raise DecodeError(
                "receipt logs are malformed",
                operation=method,
                endpoint=self.rpc_url,
            )
        return result

    @staticmethod
    def compute_event_topic_hash(signature: str) -> str:
        """Topic hash (Keccak-256) of an event signature."""
        return event_topic_hash(signature)

    def select_log_index(
        self,
        logs: List[LogEntry],
        log_index: Optional[int] = None,
        event_signature: Optional[str] = None,
    ) -> int:
        """
        Pick the log to prove.

        An explicit index wins, then the first log whose topic[0] matches the
        event signature hash, else log 0.
        """
        if not logs:
            raise NoLogsError("no logs found in transaction receipt")

        if log_index is not None:
            if log_index < 0 or log_index >= len(logs):
                raise IndexOutOfRangeError(log_index, len(logs))
            _logger.debug(f"Using specified log index: {log_index}")
            return log_index

        if event_signature:
            signature = event_signature.strip()
            topic = self.compute_event_topic_hash(signature)
            _logger.debug(f"Searching for log with event signature {signature} ({topic})")

            for i, log in enumerate(logs):
                topics = log.get("topics") or []
                if topics and str(topics[0]).lower() == topic.lower():
                    _logger.debug(f"Found matching log at index {i}")
                    return i

            raise NoMatchingLogError(
                f"no log found with event signature: {event_signature}"
            )

        _logger.debug("No log index or event signature provided, using first log")
        return 0

    def resolve(
        self,
        tx_hash: str,
        log_index: Optional[int] = None,
        event_signature: Optional[str] = None,
        chain_id: Optional[int] = None,
    ) -> TransactionCoordinates:
        """
        Resolve a transaction hash into proof coordinates.

        Args:
            tx_hash: Transaction hash, with or without 0x prefix
            log_index: Explicit position of the log in the receipt
            event_signature: Event signature used to find the log
            chain_id: Chain ID to use instead of the transaction's chainId

        Returns:
            TransactionCoordinates: Coordinates for log_requestProof

        Raises:
            RemoteError: If the node is unreachable or returns an error
            DecodeError: If a response has an unexpected shape
            NoLogsError: If the receipt has no logs
            IndexOutOfRangeError: If log_index is outside the receipt
            NoMatchingLogError: If no log matches the event signature
            MissingChainIDError: If the chain ID is unknown
        """
        tx = self.fetch_transaction(tx_hash)
        receipt = self.fetch_receipt(tx_hash)

        selected = self.select_log_index(
            receipt["logs"], log_index=log_index, event_signature=event_signature
        )

        block_number = self._hex_field(receipt, "blockNumber", "block number in receipt")
        tx_index = self._hex_field(receipt, "transactionIndex", "transaction index in receipt")

        if chain_id is None:
            if not tx.get("chainId"):
                raise MissingChainIDError(
                    "chain ID not found in transaction, please provide it with --chain-id flag"
                )
            chain_id = self._hex_field(tx, "chainId", "chain ID in transaction")

        coordinates = TransactionCoordinates(
            chain_id=chain_id,
            block_number=block_number,
            tx_index=tx_index,
            log_index=selected,
        )
        _logger.debug(f"Resolved {tx_hash} to {coordinates}")
        return coordinates

    @staticmethod
    def _hex_field(source: dict, field: str, label: str) -> int:
        try:
            return hex_to_uint64(source[field])
        except ValidationError as e:
            e.message = f"invalid {label}: {e.message}"
            raise


def resolve_transaction(
    tx_hash: str,
    rpc_url: str,
    log_index: Optional[int] = None,
    event_signature: Optional[str] = None,
    chain_id: Optional[int] = None,
) -> TransactionCoordinates:
    """Resolve a transaction hash against the given RPC endpoint."""
    resolver = BlockchainResolver(rpc_url)
    return resolver.resolve(
        tx_hash,
        log_index=log_index,
        event_signature=event_signature,
        chain_id=chain_id,
    )
