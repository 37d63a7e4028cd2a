"""
Client for the Polymer Prove API.

The API is a JSON-RPC 2.0 endpoint over HTTPS authenticated with a bearer
token. A proof request returns a job id; the job is then polled with
log_queryProof until it completes or fails.
"""

import math
import re
import threading
import time
from typing import Any, Dict, List, Optional, Union

import httpx

from polymer_toolkit.proofs.types import ProofState, ProofStatus
from polymer_toolkit.shared.config import ProofConfig
from polymer_toolkit.shared.exceptions import (
    DecodeError,
    ErrorKind,
    InvalidJobIDError,
    PollingCancelledError,
    PollingTimeoutError,
    ProofFailedError,
    SubmissionError,
    UnknownStatusError,
    ValidationError,
)
from polymer_toolkit.shared.logging import get_logger
from polymer_toolkit.shared.services.http_client import build_client
from polymer_toolkit.shared.types import TransactionCoordinates

_logger = get_logger(__name__)

REQUEST_PROOF_METHOD = "log_requestProof"
QUERY_PROOF_METHOD = "log_queryProof"

# ASCII decimal or float literal; no underscores, no non-ASCII digits
_JOB_ID_PATTERN = re.compile(
    r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII
)


def _normalize_job_id(result: Any) -> str:
    """Job ids come back as strings or JSON numbers; keep the string form."""
    if isinstance(result, bool):
        raise DecodeError(f"unexpected result type: {type(result).__name__}")
    if isinstance(result, str):
        if not result:
            raise DecodeError("empty job ID in response")
        return result
    if isinstance(result, int):
        return str(result)
    if isinstance(result, float) and math.isfinite(result):
        return f"{result:.0f}"
    raise DecodeError(f"unexpected result type: {type(result).__name__}")


def _job_id_param(job_id: str) -> Union[int, float]:
    """Parse a job id back to the numeric form log_queryProof expects."""
    text = str(job_id).strip()
    if not _JOB_ID_PATTERN.fullmatch(text):
        raise InvalidJobIDError(f"invalid job ID: {job_id!r}")

    if text.lstrip("+-").isdigit():
        return int(text)

    number = float(text)
    if not math.isfinite(number):
        raise InvalidJobIDError(f"invalid job ID: {job_id!r}")
    return int(number) if number.is_integer() else number


class ProofServiceClient:
    """Submit proof requests and track proof jobs on the proving service."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        debug: bool = False,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Bearer token for the Prove API
            api_url: JSON-RPC endpoint of the Prove API
            debug: Log request and response bodies
            http_client: Optional pre-built httpx client (owned by the caller)
        """
        self.api_key = api_key
        self.api_url = api_url
        self.debug = debug
        self._owns_client = http_client is None
        self._client = http_client or build_client()

    @classmethod
    def from_config(cls, config: ProofConfig) -> "ProofServiceClient":
        return cls(config.api_key, config.api_url, debug=config.debug)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ProofServiceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _call(self, method: str, params: List[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        if self.debug:
            _logger.debug(f"Sending {method} to {self.api_url}: {payload}")

        try:
            response = self._client.post(
                self.api_url, json=payload, headers=self._headers()
            )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise SubmissionError(
                f"request failed: {e}",
                kind=ErrorKind.TRANSPORT,
                cause=e,
                operation=method,
                endpoint=self.api_url,
            )

        if self.debug:
            _logger.debug(
                f"Response status: {response.status_code}, body: {response.text}"
            )

        if response.status_code != 200:
            raise SubmissionError(
                f"API request failed with status {response.status_code}: "
                f"{response.text}",
                kind=ErrorKind.PROTOCOL,
                operation=method,
                endpoint=self.api_url,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(
                f"failed to decode response: {e}",
                cause=e,
                operation=method,
                endpoint=self.api_url,
            )

        if not isinstance(body, dict):
            raise DecodeError(
                f"unexpected response envelope: {body!r}",
                operation=method,
                endpoint=self.api_url,
            )

        error = body.get("error")
        if error is not None:
            if isinstance(error, dict):
                message = error.get("message", "")
                code = error.get("code")
                if code is not None:
                    message = f"{message} (code {code})"
            else:
                message = str(error)
            raise SubmissionError(
                f"API returned error: {message}",
                kind=ErrorKind.PROTOCOL,
                operation=method,
                endpoint=self.api_url,
            )

        return body.get("result")

    def request_proof(
        self,
        chain_id: int,
        block_number: int,
        tx_index: int,
        log_index: int,
    ) -> str:
        """
        Request a proof for a transaction log.

        Args:
            chain_id: Source chain ID
            block_number: Source block number
            tx_index: Transaction index in the block
            log_index: Log index in the transaction

        Returns:
            str: Job id assigned by the proving service

        Raises:
            ValidationError: If a coordinate is out of range
            SubmissionError: On transport, HTTP or JSON-RPC failure
            DecodeError: If the job id cannot be read from the response
        """
        coordinates = TransactionCoordinates(
            chain_id=chain_id,
            block_number=block_number,
            tx_index=tx_index,
            log_index=log_index,
        )
        return self.request_proof_for(coordinates)

    def request_proof_for(self, coordinates: TransactionCoordinates) -> str:
        result = self._call(REQUEST_PROOF_METHOD, coordinates.as_params())
        try:
            job_id = _normalize_job_id(result)
        except DecodeError as e:
            e.operation = REQUEST_PROOF_METHOD
            e.endpoint = self.api_url
            raise
        _logger.debug(f"Proof request submitted, job ID {job_id}")
        return job_id

    def get_status(self, job_id: str) -> ProofStatus:
        """
        Fetch the current status of a proof job.

        Raises:
            InvalidJobIDError: If the job id is not numeric
            SubmissionError: On transport, HTTP or JSON-RPC failure
            DecodeError: If the status payload is malformed
        """
        job_id_num = _job_id_param(job_id)
        result = self._call(QUERY_PROOF_METHOD, [job_id_num])
        try:
            return ProofStatus.from_result(result)
        except DecodeError as e:
            e.operation = QUERY_PROOF_METHOD
            e.endpoint = self.api_url
            raise

    def wait_for_proof(
        self,
        job_id: str,
        max_attempts: int,
        interval: float,
        cancel_event: Optional[threading.Event] = None,
    ) -> ProofStatus:
        """
        Poll a job until its proof is ready.

        pending/processing keep polling at a fixed interval; completed
        returns; failed and unknown statuses raise at once. Errors from
        get_status are not retried.

        Args:
            job_id: Job id returned by request_proof
            max_attempts: Maximum number of status observations
            interval: Seconds to wait between observations
            cancel_event: Optional event; setting it stops the wait

        Returns:
            ProofStatus: The completed status carrying the proof

        Raises:
            ProofFailedError: If the service reports the job as failed
            UnknownStatusError: If the service returns an unknown status
            PollingTimeoutError: If no terminal state is seen in time
            PollingCancelledError: If cancel_event is set while waiting
        """
        if max_attempts < 1:
            raise ValidationError("max-attempts must be greater than 0")
        if interval < 0:
            raise ValidationError("interval must not be negative")

        for attempt in range(max_attempts):
            _logger.debug(
                f"Polling attempt {attempt + 1}/{max_attempts} for job {job_id}"
            )

            status = self.get_status(job_id)
            state = status.state

            if state is ProofState.COMPLETED:
                return status
            if state is ProofState.FAILED:
                raise ProofFailedError(job_id, status.error or "unknown error")
            if state is None:
                raise UnknownStatusError(job_id, status.status)

            if attempt == max_attempts - 1:
                break

            _logger.debug(
                f"Job status: {status.status}, waiting {interval:.1f}s..."
            )
            if cancel_event is not None:
                if cancel_event.wait(interval):
                    raise PollingCancelledError(job_id, attempt + 1)
            else:
                time.sleep(interval)

        raise PollingTimeoutError(job_id, max_attempts)
