"""Receipt Poller - block until a submitted transaction is mined or a deadline passes."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .rpc import ChainClient, TxReceipt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0
DEFAULT_POLL_INTERVAL = 2.0


class ReceiptPoller:
    def __init__(
        self,
        client: ChainClient,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self._clock = clock
        self._sleep = sleep

    def wait(
        self,
        tx_hash: str,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> Optional[TxReceipt]:
        """
        Wait for a transaction receipt.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds
            poll_interval: Polling interval in seconds

        Returns:
            The receipt, or None if the transaction was not mined in time.
            Not being mined yet is a normal outcome, not an error.

        Raises:
            TransportError, RpcError: If a receipt request fails
        """
        deadline = self._clock() + timeout
        polls = 0
        while self._clock() < deadline:
            polls += 1
            receipt = self.client.get_transaction_receipt(tx_hash)
            if receipt is not None:
                logger.debug("Receipt for %s after %d poll(s)", tx_hash, polls)
                return receipt
            self._sleep(poll_interval)

        logger.info("No receipt for %s within %ss", tx_hash, timeout)
        return None

    def is_mined_and_successful(
        self,
        tx_hash: str,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> bool:
        receipt = self.wait(tx_hash, timeout=timeout, poll_interval=poll_interval)
        return receipt is not None and receipt.status_ok
