"""Constants for the bridge deposit call layout."""

ADDRESS_LENGTH = 20
RESOURCE_ID_LENGTH = 32

MAX_DOMAIN_ID = 2**8 - 1
MAX_UINT256 = 2**256 - 1

# Bridge.deposit(uint8 destinationDomainID, bytes32 resourceID, bytes data)
DEPOSIT_FUNCTION_SIGNATURE = "deposit(uint8,bytes32,bytes)"
DEPOSIT_ARGUMENT_TYPES = ("uint8", "bytes32", "bytes")

DEFAULT_GAS_LIMIT = 2_000_000
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_RECEIPT_TIMEOUT = 120.0

# Decimal digits of MAX_UINT256; longer amounts cannot be encoded
MAX_AMOUNT_DIGITS = len(str(MAX_UINT256))
