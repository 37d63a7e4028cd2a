"""
Exception hierarchy for the Polymer proof toolkit.

Every error raised by the toolkit is a PolymerError tagged with an ErrorKind,
so callers can branch on ``err.kind`` instead of parsing messages.

Error Kinds:
- TRANSPORT: network/connection failure (endpoint unreachable, timeout)
- PROTOCOL: non-2xx HTTP status or a JSON-RPC error payload
- DECODE: response body that cannot be parsed into the expected shape
- VALIDATION: bad user-supplied input (numbers, log index, job id, config)
- DOMAIN: valid exchange but unusable content (no logs, failed proof, ...)
- TIMEOUT: polling exhausted or cancelled

Remote failures are split by collaborator:
- RemoteError -> blockchain JSON-RPC node (kind TRANSPORT or PROTOCOL)
- SubmissionError -> proving service (kind TRANSPORT or PROTOCOL)
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Discriminant carried by every PolymerError."""

    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    DECODE = "decode"
    VALIDATION = "validation"
    DOMAIN = "domain"
    TIMEOUT = "timeout"


class PolymerError(Exception):
    """
    Base class for all toolkit errors.

    Attributes:
        message: Human-readable description
        kind: ErrorKind discriminant
        cause: Underlying exception, if any
        operation: Name of the remote method or step that failed
        endpoint: URL of the remote endpoint involved
    """

    kind: ErrorKind = ErrorKind.DOMAIN

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        cause: Optional[BaseException] = None,
        operation: Optional[str] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.cause = cause
        self.operation = operation
        self.endpoint = endpoint

    def __str__(self) -> str:
        context = []
        if self.operation:
            context.append(self.operation)
        if self.endpoint:
            context.append(self.endpoint)
        if context:
            return f"{self.message} ({' @ '.join(context)})"
        return self.message


class RemoteError(PolymerError):
    """Failure talking to the blockchain JSON-RPC node."""

    kind = ErrorKind.TRANSPORT


class SubmissionError(PolymerError):
    """Failure talking to the proving service."""

    kind = ErrorKind.TRANSPORT


class DecodeError(PolymerError):
    """Response body or result could not be decoded."""

    kind = ErrorKind.DECODE


class ValidationError(PolymerError):
    """Invalid user-supplied input."""

    kind = ErrorKind.VALIDATION


class IndexOutOfRangeError(ValidationError):
    """Explicit log index outside the receipt's log list."""

    def __init__(self, index: int, log_count: int):
        super().__init__(
            f"log index {index} is out of range, transaction has {log_count} logs"
        )
        self.index = index
        self.log_count = log_count


class Uint64OverflowError(ValidationError):
    """Hex value does not fit in 64 bits."""

    pass


class InvalidJobIDError(ValidationError):
    """Job identifier is not numeric."""

    pass


class ConfigurationError(ValidationError):
    """
    Configuration/startup error.

    Use when:
    - The API key is missing
    - Attempts or interval are not positive
    - A config value cannot be parsed
    """

    pass


class DomainError(PolymerError):
    """Well-formed exchange whose content cannot be used."""

    kind = ErrorKind.DOMAIN


class NoLogsError(DomainError):
    pass


class NoMatchingLogError(DomainError):
    pass


class MissingChainIDError(DomainError):
    pass


class TransactionNotFoundError(DomainError):
    pass


class ProofFailedError(DomainError):
    """The proving service reported the job as failed."""

    def __init__(self, job_id: str, remote_error: str):
        super().__init__(f"proof generation failed: {remote_error}")
        self.job_id = job_id
        self.remote_error = remote_error


class UnknownStatusError(DomainError):
    """The proving service returned a status outside the known set."""

    def __init__(self, job_id: str, status: str):
        super().__init__(f"unknown job status: {status}")
        self.job_id = job_id
        self.status = status


class PollingTimeoutError(PolymerError):
    """Polling exhausted its attempts without a terminal state."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, job_id: str, attempts: int):
        super().__init__(
            f"max polling attempts ({attempts}) reached without completion"
        )
        self.job_id = job_id
        self.attempts = attempts


class PollingCancelledError(PolymerError):
    """Polling was cancelled by the caller."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, job_id: str, attempts: int):
        super().__init__(f"polling cancelled after {attempts} attempts")
        self.job_id = job_id
        self.attempts = attempts
