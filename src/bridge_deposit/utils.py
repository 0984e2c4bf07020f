"""Conversion helpers turning operator input into on-chain values."""

import re

from eth_utils import decode_hex, is_hex_address, remove_0x_prefix, to_checksum_address
from web3.types import ChecksumAddress

from .constants import MAX_AMOUNT_DIGITS, RESOURCE_ID_LENGTH
from .exceptions import (
    InvalidAddressError,
    InvalidAmountError,
    InvalidResourceIdError,
    ResourceIdTooLongError,
)

_AMOUNT_PATTERN = re.compile(r"(?P<whole>[0-9]*)(?:\.(?P<fraction>[0-9]*))?")
_HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")


def validate_address(value: str, field: str) -> ChecksumAddress:
    """Validate a hex address (prefix optional, checksum ignored) and checksum it."""
    if not isinstance(value, str) or not is_hex_address(value):
        raise InvalidAddressError(f"Invalid {field} address: {value!r}", field=field, value=value)

    return to_checksum_address("0x" + remove_0x_prefix(value))


def to_smallest_units(amount: str, decimals: int) -> int:
    """Convert a decimal amount string to an integer scaled by ``10**decimals``.

    The conversion is exact: an amount carrying more fractional digits than
    ``decimals`` is rejected instead of truncated.

    Args:
        amount: Non-negative base-10 number, e.g. ``"1.5"``
        decimals: Token decimal places

    Returns:
        Amount in smallest token units

    Raises:
        InvalidAmountError: If the amount is malformed or would lose precision
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidAmountError(
            "Decimals must be a non-negative integer", field="decimals", value=decimals
        )

    match = _AMOUNT_PATTERN.fullmatch(amount) if isinstance(amount, str) else None
    if match is None:
        raise InvalidAmountError(f"Invalid amount: {amount!r}", field="amount", value=amount)

    whole = match.group("whole")
    fraction = match.group("fraction") or ""
    if not whole and not fraction:
        raise InvalidAmountError(f"Invalid amount: {amount!r}", field="amount", value=amount)

    if len(fraction) > decimals:
        raise InvalidAmountError(
            f"Amount {amount} has more than {decimals} fractional digits",
            field="amount",
            value=amount,
            details={"fractional_digits": len(fraction), "decimals": decimals},
        )

    significant = (whole + fraction).lstrip("0")
    if not significant:
        return 0

    scale = decimals - len(fraction)
    if len(significant) + scale > MAX_AMOUNT_DIGITS:
        raise InvalidAmountError(
            f"Amount {amount} does not fit in 32 bytes with {decimals} decimals",
            field="amount",
            value=amount,
            details={"digits": len(significant) + scale, "max_digits": MAX_AMOUNT_DIGITS},
        )

    return int(significant) * 10**scale


def normalise_resource_id(value: str) -> bytes:
    """Decode a hex resource id into exactly 32 bytes.

    Shorter values are right-padded with zero bytes; longer values are rejected.
    """
    if not isinstance(value, str):
        raise InvalidResourceIdError(
            "Resource id must be a hex string", field="resource_id", value=value
        )

    digits = remove_0x_prefix(value)
    if _HEX_PATTERN.fullmatch(digits) is None:
        raise InvalidResourceIdError(
            f"Resource id is not valid hex: {value!r}", field="resource_id", value=value
        )
    if len(digits) % 2:
        raise InvalidResourceIdError(
            f"Resource id has an odd number of hex digits: {value!r}",
            field="resource_id",
            value=value,
        )

    raw = decode_hex(digits)
    if len(raw) > RESOURCE_ID_LENGTH:
        raise ResourceIdTooLongError(
            f"Resource id is {len(raw)} bytes, maximum is {RESOURCE_ID_LENGTH}",
            field="resource_id",
            value=value,
        )

    return raw.ljust(RESOURCE_ID_LENGTH, b"\x00")
