"""Structured event sinks for the deposit pipeline."""

from __future__ import annotations

import logging
from typing import Any, Protocol

CHAIN_HEAD = "chain_head"
TRANSACTION_SIGNED = "transaction_signed"
TRANSACTION_SENT = "transaction_sent"
DEPOSIT_SUMMARY = "deposit_summary"
DEPOSIT_FAILED = "deposit_failed"


class EventSink(Protocol):
    """Receiver for pipeline events."""

    def emit(self, event: str, **fields: Any) -> None: ...


class LoggingEventSink:
    """Write pipeline events to a standard library logger."""

    _LEVELS = {
        CHAIN_HEAD: logging.DEBUG,
        TRANSACTION_SIGNED: logging.INFO,
        TRANSACTION_SENT: logging.INFO,
        DEPOSIT_SUMMARY: logging.INFO,
        DEPOSIT_FAILED: logging.ERROR,
    }

    _TEMPLATES = {
        CHAIN_HEAD: "Current block number: {block_number}",
        TRANSACTION_SIGNED: "Broadcasting ERC20 deposit transaction {tx_hash} to {to}",
        TRANSACTION_SENT: "ERC20 deposit transaction sent: {tx_hash}",
        DEPOSIT_SUMMARY: "{amount} tokens were transferred to {recipient} from {sender}",
        DEPOSIT_FAILED: "Deposit failed at stage={stage}: {error}",
    }

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("bridge_deposit.events")

    def emit(self, event: str, **fields: Any) -> None:
        level = self._LEVELS.get(event, logging.INFO)
        if not self._logger.isEnabledFor(level):
            return

        template = self._TEMPLATES.get(event)
        try:
            message = template.format(**fields) if template else None
        except KeyError:
            message = None

        if message is None:
            rendered = " ".join(f"{key}={value}" for key, value in fields.items())
            message = f"{event} {rendered}".rstrip()

        self._logger.log(level, "%s", message)
