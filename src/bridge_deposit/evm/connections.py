"""Connection helpers for the EVM deposit client."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol, cast

from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import HTTPProvider, Web3
from web3.exceptions import TimeExhausted
from web3.types import ChecksumAddress

from ..exceptions import ClientError, NetworkError, ValidationError
from .config import ClientConfig

logger = logging.getLogger(__name__)


class ChainClient(Protocol):
    """Chain queries and broadcast used by transaction submission."""

    def block_number(self) -> int: ...

    def chain_id(self) -> int: ...

    def get_transaction_count(self, address: ChecksumAddress) -> int: ...

    def gas_price(self) -> int: ...

    def max_priority_fee(self) -> int: ...

    def base_fee(self) -> int | None: ...

    def send_raw_transaction(self, raw_transaction: bytes) -> HexBytes: ...

    def wait_for_receipt(self, tx_hash: HexBytes, timeout: float) -> Any: ...


class Web3ChainClient:
    """``ChainClient`` backed by a ``web3.Web3`` instance."""

    def __init__(self, web3: Web3, *, endpoint: str | None = None) -> None:
        self._web3 = web3
        self._endpoint = endpoint
        self._chain_id: int | None = None

    def block_number(self) -> int:
        return self._query("fetch current block number", lambda: self._web3.eth.block_number)

    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self._query("fetch chain id", lambda: self._web3.eth.chain_id)
        return self._chain_id

    def get_transaction_count(self, address: ChecksumAddress) -> int:
        return self._query(
            "fetch sender nonce",
            lambda: self._web3.eth.get_transaction_count(address, "pending"),
        )

    def gas_price(self) -> int:
        return self._query("fetch gas price", lambda: self._web3.eth.gas_price)

    def max_priority_fee(self) -> int:
        return self._query("fetch max priority fee", lambda: self._web3.eth.max_priority_fee)

    def base_fee(self) -> int | None:
        block = self._query("fetch latest block", lambda: self._web3.eth.get_block("latest"))
        base_fee = block.get("baseFeePerGas")
        return int(base_fee) if base_fee is not None else None

    def send_raw_transaction(self, raw_transaction: bytes) -> HexBytes:
        return self._query(
            "broadcast signed transaction",
            lambda: self._web3.eth.send_raw_transaction(raw_transaction),
        )

    def wait_for_receipt(self, tx_hash: HexBytes, timeout: float) -> Any:
        try:
            return self._web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        except TimeExhausted as exc:
            raise ClientError(
                f"Transaction not mined within {timeout:.0f} seconds",
                endpoint=self._endpoint,
                details={"tx_hash": tx_hash.to_0x_hex(), "error": str(exc)},
            ) from exc
        except Exception as exc:
            raise ClientError(
                "Failed to fetch transaction receipt",
                endpoint=self._endpoint,
                details={"tx_hash": tx_hash.to_0x_hex(), "error": str(exc)},
            ) from exc

    def _query(self, action: str, call: Callable[[], Any]) -> Any:
        try:
            return call()
        except Exception as exc:
            raise ClientError(
                f"Failed to {action}",
                endpoint=self._endpoint,
                details={"error": str(exc)},
            ) from exc


class Web3Connections:
    """Manage the Web3 provider, signer account and chain client."""

    def __init__(self, config: ClientConfig):
        self.config = config
        self._provider: HTTPProvider | None = None
        self._web3: Web3 | None = None
        self._account: LocalAccount | None = None
        self._client: Web3ChainClient | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        """Derive the signer and build the provider.

        No RPC request is made here; the first chain query happens on submission.
        """

        try:
            signer = cast(LocalAccount, Account.from_key(self.config.private_key))  # type: ignore[arg-type]
        except Exception as exc:
            raise ValidationError(
                "Failed to derive signer account from provided private key",
                field="private_key",
                details={"error": str(exc)},
            ) from exc

        self._account = signer
        self._provider = HTTPProvider(
            self.config.rpc_url, request_kwargs={"timeout": self.config.request_timeout}
        )
        self._web3 = Web3(self._provider)
        self._client = Web3ChainClient(self._web3, endpoint=self.config.rpc_url)
        logger.info("Using RPC endpoint %s as %s", self.config.rpc_url, signer.address)

    def disconnect(self) -> None:
        self._provider = None
        self._web3 = None
        self._account = None
        self._client = None

    def is_connected(self) -> bool:
        return self._client is not None and self._account is not None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise NetworkError(
                "Signer account is not initialised; call connect() first",
                endpoint=self.config.rpc_url,
            )
        return self._account

    @property
    def web3(self) -> Web3:
        if self._web3 is None:
            raise NetworkError("RPC provider not connected", endpoint=self.config.rpc_url)
        return self._web3

    @property
    def client(self) -> Web3ChainClient:
        if self._client is None:
            raise NetworkError("Chain client not connected", endpoint=self.config.rpc_url)
        return self._client
