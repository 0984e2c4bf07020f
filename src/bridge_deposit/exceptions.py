"""Exception hierarchy for the bridge deposit pipeline."""

from typing import Any


class BridgeError(Exception):
    """Base exception for all bridge deposit errors."""

    stage = "deposit"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(BridgeError):
    """Raised when operator input cannot be turned into a deposit."""

    stage = "validate"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidAddressError(ValidationError):
    """Raised when a recipient or bridge address is not a 20-byte hex value."""

    stage = "validate"


class InvalidAmountError(ValidationError):
    """Raised when an amount cannot be converted to smallest units exactly."""

    stage = "amount"


class InvalidResourceIdError(ValidationError):
    """Raised when a resource id is not well-formed hex."""

    stage = "resource_id"


class ResourceIdTooLongError(InvalidResourceIdError):
    """Raised when a resource id decodes to more than 32 bytes."""


class EncodingError(ValidationError):
    """Raised when deposit calldata cannot be encoded."""

    stage = "encode"


class NetworkError(BridgeError):
    """Raised when RPC communication fails."""

    stage = "client"

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class ClientError(NetworkError):
    """Raised when a chain query (head, nonce, fees) fails."""

    stage = "client"


class SubmissionError(NetworkError):
    """Raised when a signed transaction is rejected or not confirmed."""

    stage = "submit"

    def __init__(
        self,
        message: str,
        tx_hash: str | None = None,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, endpoint, details)
        self.tx_hash = tx_hash
