"""Registers a pool of node accounts as FlightSurety oracles."""

import asyncio
import logging
import time
from typing import Optional, Sequence, Tuple

from flightsurety.api.client import to_hex
from flightsurety.core.oracle import Oracle, OraclePool
from flightsurety.db.service import (
    record,
    store_operational_error,
    store_oracle_registration,
)
from flightsurety.utils.alerts import AlertManager
from flightsurety.utils.exceptions import FlightSuretyError, RevertError

logger = logging.getLogger("registration")
logging.Formatter.converter = time.gmtime


class OracleRegistry:
    """Pays the registration fee for each pool account and records its indexes."""

    def __init__(
        self,
        client,
        max_concurrency: int = 5,
        gas: Optional[int] = 500000,
        alerts_manager: Optional[AlertManager] = None,
    ):
        self.client = client
        self.max_concurrency = max(1, max_concurrency)
        self.gas = gas
        self.alerts_manager = alerts_manager

    @property
    def network_name(self) -> str:
        network = getattr(self.client, "network", None)
        return network.name if network else "unknown"

    async def register_all(self, accounts: Sequence[str], pool_size: int) -> OraclePool:
        """Register the first `pool_size` accounts; failed accounts are left out."""
        fee = await self.client.call("REGISTRATION_FEE")
        logger.info("Registration fee: %s wei", fee)

        candidates = list(accounts)[:pool_size]
        if len(candidates) < pool_size:
            logger.warning(
                "Only %d accounts available for a pool of %d oracles",
                len(candidates),
                pool_size,
            )

        semaphore = asyncio.Semaphore(self.max_concurrency)
        results = await asyncio.gather(
            *(self._register(account, fee, semaphore) for account in candidates)
        )

        pool = OraclePool()
        for oracle in results:
            if oracle is not None:
                pool.add(oracle)

        logger.info(
            "Registered %d of %d oracles",
            len(pool),
            len(candidates),
            extra={"tag": "oracles_registered", "registered": len(pool)},
        )
        if self.alerts_manager:
            await self._check_alerts(pool, pool_size)
        return pool

    async def _register(
        self, account: str, fee: int, semaphore: asyncio.Semaphore
    ) -> Optional[Oracle]:
        """Register one account, then read back its own index assignment."""
        async with semaphore:
            try:
                receipt = await self.client.send(
                    "registerOracle", sender=account, value=fee, gas=self.gas
                )
                indexes = await self.fetch_indexes(account)
            except FlightSuretyError as exc:
                logger.error("Failed to register oracle %s: %r", account, exc)
                await record(
                    store_operational_error,
                    exc,
                    context=f"registerOracle from {account}",
                )
                return None

        oracle = Oracle(account=account, indexes=indexes)
        logger.info("Oracle registered: %s %s", account, list(indexes))

        await record(
            store_oracle_registration,
            self.network_name,
            oracle,
            fee,
            to_hex(receipt["transactionHash"]),
        )
        return oracle

    async def fetch_indexes(self, account: str) -> Tuple[int, ...]:
        """Index set the contract assigned to `account`."""
        indexes = tuple(
            int(index) for index in await self.client.call("getMyIndexes", sender=account)
        )
        if not indexes:
            raise RevertError("getMyIndexes", f"no indexes assigned to {account}")
        return indexes

    async def _check_alerts(self, pool: OraclePool, pool_size: int) -> None:
        await self.alerts_manager.check_pool_size(len(pool), pool_size)
        for account in pool.accounts:
            try:
                balance = await self.client.get_balance(account)
            except FlightSuretyError as exc:
                logger.error("Could not read balance of %s: %s", account, exc)
                continue
            await self.alerts_manager.check_eth_balance(balance, account)
