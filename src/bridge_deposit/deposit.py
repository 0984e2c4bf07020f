"""ERC20 deposit pipeline: validate, convert, encode, submit."""

from __future__ import annotations

import logging

from eth_utils import to_bytes
from web3.types import ChecksumAddress

from .constants import DEFAULT_GAS_LIMIT
from .events import DEPOSIT_FAILED, DEPOSIT_SUMMARY, EventSink
from .evm.encoding import construct_erc20_deposit_data, prepare_erc20_deposit_input
from .evm.transactions import TransactionSubmitter
from .exceptions import BridgeError
from .types import DepositRequest, PreparedDeposit, SubmissionResult
from .utils import normalise_resource_id, to_smallest_units, validate_address

logger = logging.getLogger(__name__)


def prepare_deposit(request: DepositRequest) -> PreparedDeposit:
    """Run every offline stage of the pipeline.

    Addresses are checked first so that a malformed address never reaches
    amount conversion or encoding.
    """
    recipient = validate_address(request.recipient, "recipient")
    bridge = validate_address(request.bridge, "bridge")

    amount_units = to_smallest_units(request.amount, request.decimals)
    resource_id = normalise_resource_id(request.resource_id)

    data = construct_erc20_deposit_data(to_bytes(hexstr=recipient), amount_units)
    calldata = prepare_erc20_deposit_input(request.destination_domain_id, resource_id, data)

    return PreparedDeposit(
        bridge=bridge,
        recipient=recipient,
        amount_units=amount_units,
        resource_id=resource_id,
        destination_domain_id=request.destination_domain_id,
        calldata=calldata,
    )


def report_failure(events: EventSink, exc: BridgeError) -> None:
    """Emit a ``deposit_failed`` event naming the stage and cause."""
    events.emit(DEPOSIT_FAILED, stage=exc.stage, error=exc.message, details=exc.details)


class DepositService:
    """Turn a ``DepositRequest`` into one broadcast bridge deposit."""

    def __init__(
        self,
        submitter: TransactionSubmitter,
        events: EventSink,
        *,
        sender: ChecksumAddress | str,
        gas_limit: int = DEFAULT_GAS_LIMIT,
    ) -> None:
        self._submitter = submitter
        self._events = events
        self._sender = sender
        self._gas_limit = gas_limit

    def deposit(self, request: DepositRequest) -> SubmissionResult:
        try:
            prepared = prepare_deposit(request)
            logger.debug(
                "Prepared deposit (units=%s, domain=%s, resource=%s)",
                prepared.amount_units,
                prepared.destination_domain_id,
                prepared.resource_id.hex(),
            )
            result = self._submitter.submit(prepared.bridge, prepared.calldata, self._gas_limit)
        except BridgeError as exc:
            report_failure(self._events, exc)
            raise

        self._events.emit(
            DEPOSIT_SUMMARY,
            amount=request.amount,
            recipient=prepared.recipient,
            sender=self._sender,
            tx_hash=result.transaction_hash,
        )
        return result
