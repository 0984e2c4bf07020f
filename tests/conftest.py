from __future__ import annotations

from typing import Any

import pytest
from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import Web3

from bridge_deposit.exceptions import ClientError

TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


class FakeChainClient:
    """In-memory chain client recording every call."""

    def __init__(
        self,
        *,
        block: int = 100,
        chain_id: int = 1337,
        nonce: int = 7,
        gas_price: int = 10**9,
        max_priority_fee: int = 2 * 10**9,
        base_fee: int | None = None,
        receipt: dict[str, Any] | None = None,
        fail_on: tuple[str, ...] = (),
    ) -> None:
        self.block = block
        self._chain_id = chain_id
        self.nonce = nonce
        self._gas_price = gas_price
        self._max_priority_fee = max_priority_fee
        self._base_fee = base_fee
        self.receipt = receipt
        self.fail_on = fail_on
        self.calls: list[str] = []
        self.sent: list[bytes] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise ClientError(f"{name} failed", endpoint="http://fake-rpc")

    def block_number(self) -> int:
        self._record("block_number")
        return self.block

    def chain_id(self) -> int:
        self._record("chain_id")
        return self._chain_id

    def get_transaction_count(self, address: str) -> int:
        self._record("get_transaction_count")
        return self.nonce

    def gas_price(self) -> int:
        self._record("gas_price")
        return self._gas_price

    def max_priority_fee(self) -> int:
        self._record("max_priority_fee")
        return self._max_priority_fee

    def base_fee(self) -> int | None:
        self._record("base_fee")
        return self._base_fee

    def send_raw_transaction(self, raw_transaction: bytes) -> HexBytes:
        self._record("send_raw_transaction")
        self.sent.append(bytes(raw_transaction))
        return HexBytes(Web3.keccak(raw_transaction))

    def wait_for_receipt(self, tx_hash: HexBytes, timeout: float) -> Any:
        self._record("wait_for_receipt")
        if self.receipt is not None:
            return self.receipt
        return {"status": 1, "blockNumber": self.block + 1, "transactionHash": tx_hash}


class RecordingEventSink:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


@pytest.fixture
def account() -> LocalAccount:
    return Account.from_key(TEST_PRIVATE_KEY)


@pytest.fixture
def chain_client() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def events() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def make_chain_client() -> type[FakeChainClient]:
    return FakeChainClient
