"""Type definitions and data models for bridge deposits."""

from dataclasses import dataclass
from typing import Any

from web3.types import ChecksumAddress

Address = str  # Ethereum address as typed by the operator
Wei = int  # Smallest token units


@dataclass(frozen=True)
class DepositRequest:
    """Operator input for a single ERC20 deposit."""

    recipient: Address
    bridge: Address
    amount: str
    decimals: int
    destination_domain_id: int
    resource_id: str


@dataclass(frozen=True)
class PreparedDeposit:
    """A deposit request after validation, conversion and encoding."""

    bridge: ChecksumAddress
    recipient: ChecksumAddress
    amount_units: Wei
    resource_id: bytes
    destination_domain_id: int
    calldata: bytes


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a broadcast deposit transaction."""

    transaction_hash: str
    block_number: int | None = None
    receipt: dict[str, Any] | None = None
