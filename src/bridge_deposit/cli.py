"""Command line entry point: ``bridge-deposit erc20 deposit``."""

from __future__ import annotations

import logging
import os

import click
from dotenv import load_dotenv

from bridge_deposit import __version__
from bridge_deposit.constants import (
    DEFAULT_GAS_LIMIT,
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
)
from bridge_deposit.deposit import DepositService, prepare_deposit, report_failure
from bridge_deposit.events import LoggingEventSink
from bridge_deposit.evm.config import ClientConfig
from bridge_deposit.evm.connections import Web3Connections
from bridge_deposit.evm.transactions import AutoTransactionBuilder, TransactionSubmitter
from bridge_deposit.exceptions import BridgeError, SubmissionError
from bridge_deposit.types import DepositRequest

logger = logging.getLogger("bridge_deposit.cli")


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.getenv("LOGLEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _validate_then_connect(
    request: DepositRequest, connections: Web3Connections, events: LoggingEventSink
) -> None:
    """Reject malformed input before the signer key is touched."""
    try:
        prepare_deposit(request)
        connections.connect()
    except BridgeError as exc:
        report_failure(events, exc)
        raise


@click.group()
@click.version_option(version=__version__, prog_name="bridge-deposit")
@click.option("--url", envvar="BRIDGE_RPC_URL", default=None, help="RPC endpoint URL.")
@click.option(
    "--private-key",
    envvar="BRIDGE_PRIVATE_KEY",
    default=None,
    help="Hex private key of the sender.",
)
@click.option(
    "--gas-limit",
    envvar="BRIDGE_GAS_LIMIT",
    type=click.IntRange(min=1),
    default=DEFAULT_GAS_LIMIT,
    show_default=True,
    help="Gas limit for the deposit transaction.",
)
@click.option(
    "--gas-price",
    envvar="BRIDGE_GAS_PRICE",
    type=click.IntRange(min=0),
    default=None,
    help="Force a legacy transaction with this gas price (wei).",
)
@click.option(
    "--request-timeout",
    type=float,
    default=DEFAULT_REQUEST_TIMEOUT,
    show_default=True,
    help="RPC request timeout in seconds.",
)
@click.option(
    "--wait/--no-wait",
    "wait_for_receipt",
    default=True,
    show_default=True,
    help="Wait for the transaction receipt.",
)
@click.option(
    "--receipt-timeout",
    type=float,
    default=DEFAULT_RECEIPT_TIMEOUT,
    show_default=True,
    help="Seconds to wait for the receipt.",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    url: str | None,
    private_key: str | None,
    gas_limit: int,
    gas_price: int | None,
    request_timeout: float,
    wait_for_receipt: bool,
    receipt_timeout: float,
    verbose: bool,
) -> None:
    """Bridge deposit CLI."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj.update(
        url=url,
        private_key=private_key,
        gas_limit=gas_limit,
        gas_price=gas_price,
        request_timeout=request_timeout,
        wait_for_receipt=wait_for_receipt,
        receipt_timeout=receipt_timeout,
    )


@cli.group()
def erc20() -> None:
    """ERC20 token operations."""


@erc20.command("deposit")
@click.option("--recipient", required=True, help="Address of the recipient.")
@click.option("--bridge", required=True, help="Address of the bridge contract.")
@click.option("--amount", required=True, help="Amount to deposit, e.g. 1.5.")
@click.option(
    "--destination-id",
    "destination_id",
    type=int,
    required=True,
    help="Destination domain id.",
)
@click.option("--resource-id", required=True, help="Resource id (hex).")
@click.option("--decimals", type=int, required=True, help="ERC20 token decimals.")
@click.pass_obj
def deposit(
    settings: dict,
    recipient: str,
    bridge: str,
    amount: str,
    destination_id: int,
    resource_id: str,
    decimals: int,
) -> None:
    """Initiate a transfer of ERC20 tokens."""
    if not settings.get("url"):
        raise click.UsageError("Missing RPC URL: pass --url or set BRIDGE_RPC_URL")
    if not settings.get("private_key"):
        raise click.UsageError(
            "Missing sender key: pass --private-key or set BRIDGE_PRIVATE_KEY"
        )

    request = DepositRequest(
        recipient=recipient,
        bridge=bridge,
        amount=amount,
        decimals=decimals,
        destination_domain_id=destination_id,
        resource_id=resource_id,
    )
    config = ClientConfig(
        rpc_url=settings["url"],
        private_key=settings["private_key"],
        gas_limit=settings["gas_limit"],
        gas_price=settings["gas_price"],
        request_timeout=settings["request_timeout"],
        wait_for_receipt=settings["wait_for_receipt"],
        receipt_timeout=settings["receipt_timeout"],
    )

    events = LoggingEventSink()
    connections = Web3Connections(config)
    try:
        _validate_then_connect(request, connections, events)
        account = connections.account
        submitter = TransactionSubmitter(
            connections.client,
            AutoTransactionBuilder(connections.client, account, gas_price=config.gas_price),
            events,
            wait_for_receipt=config.wait_for_receipt,
            receipt_timeout=config.receipt_timeout,
        )
        service = DepositService(
            submitter, events, sender=account.address, gas_limit=config.gas_limit
        )
        result = service.deposit(request)
    except SubmissionError as exc:
        hint = f" (transaction {exc.tx_hash})" if exc.tx_hash else ""
        raise click.ClickException(f"{exc.stage}: {exc.message}{hint}") from exc
    except BridgeError as exc:
        raise click.ClickException(f"{exc.stage}: {exc.message}") from exc
    finally:
        connections.disconnect()

    click.echo(result.transaction_hash)


def main() -> None:
    load_dotenv()
    cli()


if __name__ == "__main__":
    main()
