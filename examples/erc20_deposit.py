"""Example: Deposit ERC20 tokens into a bridge from Python."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from bridge_deposit import DepositRequest, DepositService, LoggingEventSink
from bridge_deposit.evm import AutoTransactionBuilder, ClientConfig, TransactionSubmitter
from bridge_deposit.evm import Web3Connections

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("erc20_deposit")


def main() -> None:
    """Deposit 1.5 tokens to the configured recipient."""
    private_key = os.getenv("BRIDGE_PRIVATE_KEY")
    if not private_key:
        raise ValueError("BRIDGE_PRIVATE_KEY not found in environment variables")

    rpc_url = os.getenv("BRIDGE_RPC_URL", "http://localhost:8545")
    bridge_address = os.getenv("BRIDGE_ADDRESS")
    recipient = os.getenv("RECIPIENT_ADDRESS")
    resource_id = os.getenv("RESOURCE_ID")

    if not bridge_address or not recipient or not resource_id:
        raise ValueError("BRIDGE_ADDRESS, RECIPIENT_ADDRESS and RESOURCE_ID must be set")

    config = ClientConfig(rpc_url=rpc_url, private_key=private_key)
    connections = Web3Connections(config)
    connections.connect()

    try:
        events = LoggingEventSink()
        client = connections.client
        submitter = TransactionSubmitter(
            client,
            AutoTransactionBuilder(client, connections.account),
            events,
            receipt_timeout=config.receipt_timeout,
        )
        service = DepositService(
            submitter, events, sender=connections.account.address, gas_limit=config.gas_limit
        )

        result = service.deposit(
            DepositRequest(
                recipient=recipient,
                bridge=bridge_address,
                amount="1.5",
                decimals=18,
                destination_domain_id=int(os.getenv("DESTINATION_DOMAIN_ID", "1")),
                resource_id=resource_id,
            )
        )
        logger.info("Deposit confirmed in block %s: %s", result.block_number, result.transaction_hash)
    finally:
        connections.disconnect()


if __name__ == "__main__":
    main()
