"""Tests for input conversion helpers."""

import pytest

from bridge_deposit.exceptions import (
    InvalidAddressError,
    InvalidAmountError,
    InvalidResourceIdError,
    ResourceIdTooLongError,
)
from bridge_deposit.utils import normalise_resource_id, to_smallest_units, validate_address

CHECKSUMMED = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class TestValidateAddress:
    """Test address validation."""

    def test_checksummed_address(self):
        """Test a checksummed address is returned unchanged."""
        assert validate_address(CHECKSUMMED, "recipient") == CHECKSUMMED

    def test_lowercase_address(self):
        """Test lowercase input is accepted and checksummed."""
        assert validate_address(CHECKSUMMED.lower(), "recipient") == CHECKSUMMED

    def test_checksum_not_enforced(self):
        """Test mixed case with a wrong checksum is still accepted."""
        wrong_case = "0xF39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
        assert validate_address(wrong_case, "bridge") == CHECKSUMMED

    def test_unprefixed_address(self):
        """Test the 0x prefix is optional."""
        assert validate_address(CHECKSUMMED[2:], "bridge") == CHECKSUMMED

    @pytest.mark.parametrize(
        "value",
        [
            "notanaddress",
            "",
            "0x",
            CHECKSUMMED[:-2],
            CHECKSUMMED + "00",
            "0x" + "g" * 40,
        ],
    )
    def test_invalid_address(self, value):
        """Test malformed addresses are rejected with the field name."""
        with pytest.raises(InvalidAddressError) as excinfo:
            validate_address(value, "recipient")
        assert excinfo.value.field == "recipient"
        assert excinfo.value.value == value


class TestToSmallestUnits:
    """Test exact decimal to smallest-unit conversion."""

    def test_fractional_amount(self):
        """Test 1.5 with 18 decimals."""
        assert to_smallest_units("1.5", 18) == 1500000000000000000

    @pytest.mark.parametrize(
        ("amount", "decimals", "expected"),
        [
            ("0", 0, 0),
            ("10", 0, 10),
            ("1.50", 2, 150),
            ("00012.30", 2, 1230),
            (".5", 1, 5),
            ("5.", 0, 5),
            ("0.000001", 6, 1),
            ("1", 6, 1000000),
        ],
    )
    def test_scaling(self, amount, decimals, expected):
        """Test the decimal point is removed and the rest scaled."""
        assert to_smallest_units(amount, decimals) == expected

    def test_large_amount_is_exact(self):
        """Test amounts beyond float precision keep every digit."""
        amount = "123456789012345678901234567890.123456789012345678"
        assert to_smallest_units(amount, 18) == 123456789012345678901234567890123456789012345678

    @pytest.mark.parametrize("decimals", [0, 1, 5])
    def test_too_many_fractional_digits(self, decimals):
        """Test more fractional digits than decimals is rejected."""
        amount = "1." + "1" * (decimals + 1)
        with pytest.raises(InvalidAmountError) as excinfo:
            to_smallest_units(amount, decimals)
        assert excinfo.value.field == "amount"

    @pytest.mark.parametrize(
        "amount", ["", ".", "-1", "+1", "1e18", "1,5", " 1", "1.2.3", "abc", "0x10"]
    )
    def test_malformed_amount(self, amount):
        """Test non-decimal input is rejected."""
        with pytest.raises(InvalidAmountError):
            to_smallest_units(amount, 18)

    def test_negative_decimals(self):
        """Test negative decimals is rejected."""
        with pytest.raises(InvalidAmountError) as excinfo:
            to_smallest_units("1", -1)
        assert excinfo.value.field == "decimals"

    def test_long_zero_amount(self):
        """Test thousands of zero digits still convert to zero."""
        assert to_smallest_units("0" * 5000, 0) == 0
        assert to_smallest_units("0" * 5000 + "." + "0" * 5000, 18) == 0

    def test_max_uint256_digits_accepted(self):
        """Test the largest 32-byte value converts exactly."""
        assert to_smallest_units(str(2**256 - 1), 0) == 2**256 - 1

    @pytest.mark.parametrize(
        ("amount", "decimals"),
        [("1" * 5000, 0), ("1", 10**9), ("1" + "0" * 78, 0), ("1.5", 78)],
    )
    def test_oversized_amount(self, amount, decimals):
        """Test amounts with more digits than 32 bytes can hold are rejected."""
        with pytest.raises(InvalidAmountError) as excinfo:
            to_smallest_units(amount, decimals)
        assert excinfo.value.field == "amount"
        assert excinfo.value.details["max_digits"] == 78


class TestNormaliseResourceId:
    """Test resource id decoding and padding."""

    def test_single_byte_is_right_padded(self):
        """Test 0x01 lands in the first byte."""
        result = normalise_resource_id("0x01")
        assert result == b"\x01" + b"\x00" * 31

    @pytest.mark.parametrize("length", range(1, 33))
    def test_padding_for_every_length(self, length):
        """Test decoded bytes lead and zero bytes fill the rest."""
        result = normalise_resource_id("ab" * length)
        assert len(result) == 32
        assert result[:length] == b"\xab" * length
        assert result[length:] == b"\x00" * (32 - length)

    def test_full_length_unchanged(self):
        """Test a 32-byte id is returned as decoded."""
        value = "0x" + "0000000000000000000000d606a00c1a39da53ea7bb3ab570bbe40b156eb6600"
        assert normalise_resource_id(value) == bytes.fromhex(value[2:])

    def test_uppercase_prefix(self):
        """Test 0X prefix is stripped as well."""
        assert normalise_resource_id("0XFF") == b"\xff" + b"\x00" * 31

    def test_deterministic(self):
        """Test the same input gives the same output."""
        assert normalise_resource_id("0x1234") == normalise_resource_id("0x1234")

    @pytest.mark.parametrize("value", ["0x1", "abc", "0x" + "1" * 63])
    def test_odd_length(self, value):
        """Test an odd number of hex digits is rejected."""
        with pytest.raises(InvalidResourceIdError):
            normalise_resource_id(value)

    @pytest.mark.parametrize("value", ["", "0x", "zz", "0x0x12", "01 02", "0xg0"])
    def test_non_hex(self, value):
        """Test empty or non-hex input is rejected."""
        with pytest.raises(InvalidResourceIdError) as excinfo:
            normalise_resource_id(value)
        assert not isinstance(excinfo.value, ResourceIdTooLongError)

    def test_too_long(self):
        """Test more than 32 bytes is rejected rather than truncated."""
        with pytest.raises(ResourceIdTooLongError):
            normalise_resource_id("0x" + "00" * 33)
