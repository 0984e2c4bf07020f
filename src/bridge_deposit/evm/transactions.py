"""Transaction construction and submission for bridge deposits."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3.types import ChecksumAddress

from ..constants import DEFAULT_RECEIPT_TIMEOUT
from ..events import CHAIN_HEAD, TRANSACTION_SENT, TRANSACTION_SIGNED, EventSink
from ..exceptions import ClientError, SubmissionError
from ..types import SubmissionResult
from .connections import ChainClient

logger = logging.getLogger(__name__)


class TransactionBuilder(Protocol):
    """Strategy that turns a contract call into a signed raw transaction."""

    def build_and_sign(
        self, to: ChecksumAddress, data: bytes, gas_limit: int
    ) -> SignedTransaction: ...


class LegacyTransactionBuilder:
    """Build type-0 transactions priced with ``gasPrice``."""

    def __init__(
        self, client: ChainClient, account: LocalAccount, *, gas_price: int | None = None
    ) -> None:
        self._client = client
        self._account = account
        self._gas_price = gas_price

    def build_and_sign(self, to: ChecksumAddress, data: bytes, gas_limit: int) -> SignedTransaction:
        gas_price = self._gas_price if self._gas_price is not None else self._client.gas_price()
        tx = {
            "nonce": self._client.get_transaction_count(self._account.address),
            "to": to,
            "value": 0,
            "gas": gas_limit,
            "gasPrice": gas_price,
            "data": HexBytes(data),
            "chainId": self._client.chain_id(),
        }
        logger.debug("Built legacy transaction (nonce=%s, gasPrice=%s)", tx["nonce"], gas_price)
        return _sign(self._account, tx)


class DynamicFeeTransactionBuilder:
    """Build EIP-1559 transactions priced with ``maxFeePerGas``."""

    def __init__(
        self,
        client: ChainClient,
        account: LocalAccount,
        *,
        max_priority_fee: int | None = None,
        base_fee: int | None = None,
    ) -> None:
        self._client = client
        self._account = account
        self._max_priority_fee = max_priority_fee
        self._base_fee = base_fee

    def build_and_sign(self, to: ChecksumAddress, data: bytes, gas_limit: int) -> SignedTransaction:
        base_fee = self._base_fee
        if base_fee is None:
            base_fee = self._client.base_fee() or 0
        tip = (
            self._max_priority_fee
            if self._max_priority_fee is not None
            else self._client.max_priority_fee()
        )
        tx = {
            "type": 2,
            "nonce": self._client.get_transaction_count(self._account.address),
            "to": to,
            "value": 0,
            "gas": gas_limit,
            "maxFeePerGas": base_fee * 2 + tip,
            "maxPriorityFeePerGas": tip,
            "data": HexBytes(data),
            "chainId": self._client.chain_id(),
        }
        logger.debug(
            "Built dynamic fee transaction (nonce=%s, maxFee=%s, tip=%s)",
            tx["nonce"],
            tx["maxFeePerGas"],
            tip,
        )
        return _sign(self._account, tx)


def select_transaction_builder(
    client: ChainClient, account: LocalAccount, *, gas_price: int | None = None
) -> TransactionBuilder:
    """Pick legacy pricing when forced or when the chain has no base fee."""
    if gas_price is not None:
        return LegacyTransactionBuilder(client, account, gas_price=gas_price)

    base_fee = client.base_fee()
    if base_fee is None:
        logger.debug("Latest block has no base fee; using legacy transactions")
        return LegacyTransactionBuilder(client, account)

    return DynamicFeeTransactionBuilder(client, account, base_fee=base_fee)


class AutoTransactionBuilder:
    """Defer builder selection until the first transaction is built."""

    def __init__(
        self, client: ChainClient, account: LocalAccount, *, gas_price: int | None = None
    ) -> None:
        self._client = client
        self._account = account
        self._gas_price = gas_price
        self._selected: TransactionBuilder | None = None

    def build_and_sign(self, to: ChecksumAddress, data: bytes, gas_limit: int) -> SignedTransaction:
        if self._selected is None:
            self._selected = select_transaction_builder(
                self._client, self._account, gas_price=self._gas_price
            )
        return self._selected.build_and_sign(to, data, gas_limit)


def _sign(account: LocalAccount, tx: dict[str, Any]) -> SignedTransaction:
    try:
        return account.sign_transaction(tx)
    except Exception as exc:  # pragma: no cover - defensive
        raise SubmissionError(
            "Failed to sign transaction",
            details={"to": tx.get("to"), "error": str(exc)},
        ) from exc


class TransactionSubmitter:
    """Sign and broadcast a single contract call, optionally awaiting its receipt."""

    def __init__(
        self,
        client: ChainClient,
        builder: TransactionBuilder,
        events: EventSink,
        *,
        wait_for_receipt: bool = True,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ) -> None:
        self._client = client
        self._builder = builder
        self._events = events
        self._wait_for_receipt = wait_for_receipt
        self._receipt_timeout = receipt_timeout

    def submit(self, to: ChecksumAddress, data: bytes, gas_limit: int) -> SubmissionResult:
        block_number = self._client.block_number()
        self._events.emit(CHAIN_HEAD, block_number=block_number)

        signed = self._builder.build_and_sign(to, data, gas_limit)
        local_hash = HexBytes(signed.hash)
        # Recorded before broadcast so an interrupted send still leaves the hash behind
        self._events.emit(TRANSACTION_SIGNED, tx_hash=local_hash.to_0x_hex(), to=to)
        logger.debug("Dispatching deposit to %s (gas=%s)", to, gas_limit)

        try:
            tx_hash = HexBytes(self._client.send_raw_transaction(signed.raw_transaction))
        except ClientError as exc:
            raise SubmissionError(
                "Failed to broadcast deposit transaction",
                tx_hash=local_hash.to_0x_hex(),
                endpoint=exc.endpoint,
                details=exc.details,
            ) from exc

        tx_hex = tx_hash.to_0x_hex()
        self._events.emit(TRANSACTION_SENT, tx_hash=tx_hex)

        if not self._wait_for_receipt:
            return SubmissionResult(transaction_hash=tx_hex)

        try:
            receipt = self._client.wait_for_receipt(tx_hash, self._receipt_timeout)
        except ClientError as exc:
            raise SubmissionError(
                f"Deposit transaction {tx_hex} was not confirmed",
                tx_hash=tx_hex,
                endpoint=exc.endpoint,
                details=exc.details,
            ) from exc

        serialised = _serialise_receipt(receipt)
        block = receipt.get("blockNumber") if isinstance(receipt, Mapping) else None
        if isinstance(receipt, Mapping) and receipt.get("status") == 0:
            raise SubmissionError(
                f"Deposit transaction {tx_hex} reverted",
                tx_hash=tx_hex,
                details={"receipt": serialised},
            )

        logger.info("Deposit transaction confirmed hash=%s block=%s", tx_hex, block)
        return SubmissionResult(transaction_hash=tx_hex, block_number=block, receipt=serialised)


def _serialise_receipt(receipt: Any) -> Any:
    """Convert a web3 receipt into JSON-friendly structures."""
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return {key: _serialise_receipt(value) for key, value in receipt.items()}
    if isinstance(receipt, bytes | bytearray):
        return HexBytes(receipt).to_0x_hex()
    if isinstance(receipt, Sequence) and not isinstance(receipt, str):
        return [_serialise_receipt(item) for item in receipt]
    return receipt
