"""Calldata construction for the bridge ``deposit`` call."""

from __future__ import annotations

import logging

from eth_abi import encode as abi_encode
from eth_abi.exceptions import EncodingError as ABIEncodingError
from web3 import Web3

from ..constants import (
    DEPOSIT_ARGUMENT_TYPES,
    DEPOSIT_FUNCTION_SIGNATURE,
    MAX_DOMAIN_ID,
    RESOURCE_ID_LENGTH,
)
from ..exceptions import EncodingError

logger = logging.getLogger(__name__)

DEPOSIT_SELECTOR = bytes(Web3.keccak(text=DEPOSIT_FUNCTION_SIGNATURE)[:4])


def construct_erc20_deposit_data(recipient: bytes, amount: int) -> bytes:
    """Build the ERC20 handler data segment.

    Layout: ``amount`` (uint256) | ``len(recipient)`` (uint256) | ``recipient``.
    """
    try:
        header = abi_encode(["uint256", "uint256"], [amount, len(recipient)])
    except ABIEncodingError as exc:
        raise EncodingError(
            "Amount does not fit in 32 bytes",
            field="amount",
            value=amount,
            details={"error": str(exc)},
        ) from exc

    return header + bytes(recipient)


def prepare_erc20_deposit_input(
    destination_domain_id: int, resource_id: bytes, data: bytes
) -> bytes:
    """Encode ``deposit(uint8,bytes32,bytes)`` calldata including the selector."""
    if (
        isinstance(destination_domain_id, bool)
        or not isinstance(destination_domain_id, int)
        or not 0 <= destination_domain_id <= MAX_DOMAIN_ID
    ):
        raise EncodingError(
            f"Destination domain id must be between 0 and {MAX_DOMAIN_ID}",
            field="destination_domain_id",
            value=destination_domain_id,
        )

    if len(resource_id) != RESOURCE_ID_LENGTH:
        raise EncodingError(
            f"Resource id must be exactly {RESOURCE_ID_LENGTH} bytes",
            field="resource_id",
            value=resource_id,
        )

    encoded_args = abi_encode(
        list(DEPOSIT_ARGUMENT_TYPES), [destination_domain_id, bytes(resource_id), bytes(data)]
    )
    logger.debug(
        "Encoded deposit input (domain=%s, resource=%s, data_len=%s)",
        destination_domain_id,
        resource_id.hex(),
        len(data),
    )
    return DEPOSIT_SELECTOR + encoded_args
