"""Configuration container for the EVM deposit client."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import DEFAULT_GAS_LIMIT, DEFAULT_RECEIPT_TIMEOUT, DEFAULT_REQUEST_TIMEOUT


@dataclass(frozen=True)
class ClientConfig:
    """Connection, signing and submission settings for one invocation."""

    rpc_url: str
    private_key: str
    gas_limit: int = DEFAULT_GAS_LIMIT
    gas_price: int | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    wait_for_receipt: bool = True
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
