"""Bridge deposit - build and submit ERC20 deposits to a ChainBridge-style bridge.

The pipeline validates operator input, converts amounts exactly into smallest
token units, encodes the bridge ``deposit`` calldata and submits one signed
transaction.
"""

from .deposit import DepositService, prepare_deposit
from .events import EventSink, LoggingEventSink
from .exceptions import (
    BridgeError,
    ClientError,
    EncodingError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidResourceIdError,
    NetworkError,
    ResourceIdTooLongError,
    SubmissionError,
    ValidationError,
)
from .types import Address, DepositRequest, PreparedDeposit, SubmissionResult, Wei
from .utils import normalise_resource_id, to_smallest_units, validate_address

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "DepositService",
    "prepare_deposit",
    "EventSink",
    "LoggingEventSink",
    # Types
    "Address",
    "Wei",
    "DepositRequest",
    "PreparedDeposit",
    "SubmissionResult",
    # Exceptions
    "BridgeError",
    "ValidationError",
    "InvalidAddressError",
    "InvalidAmountError",
    "InvalidResourceIdError",
    "ResourceIdTooLongError",
    "EncodingError",
    "NetworkError",
    "ClientError",
    "SubmissionError",
    # Utility functions
    "validate_address",
    "to_smallest_units",
    "normalise_resource_id",
]
