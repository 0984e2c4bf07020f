"""EVM helpers: calldata encoding, RPC connections and transaction submission."""

from .config import ClientConfig
from .connections import ChainClient, Web3ChainClient, Web3Connections
from .encoding import DEPOSIT_SELECTOR, construct_erc20_deposit_data, prepare_erc20_deposit_input
from .transactions import (
    AutoTransactionBuilder,
    DynamicFeeTransactionBuilder,
    LegacyTransactionBuilder,
    TransactionBuilder,
    TransactionSubmitter,
    select_transaction_builder,
)

__all__ = [
    "ClientConfig",
    "ChainClient",
    "Web3ChainClient",
    "Web3Connections",
    "DEPOSIT_SELECTOR",
    "construct_erc20_deposit_data",
    "prepare_erc20_deposit_input",
    "TransactionBuilder",
    "LegacyTransactionBuilder",
    "DynamicFeeTransactionBuilder",
    "AutoTransactionBuilder",
    "select_transaction_builder",
    "TransactionSubmitter",
]
