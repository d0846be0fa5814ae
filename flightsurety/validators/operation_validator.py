"""Module for validating that the node can start operating on the contracts."""

import logging

from flightsurety.utils.config_utils import parse_oracles_config
from flightsurety.utils.exceptions import FlightSuretyError, RevertError

logger = logging.getLogger(__name__)


class OperationValidator:
    """Validates the contracts and accounts before oracles are registered."""

    def __init__(self, config):
        """Initialize the validator with configuration data."""
        self.config = config
        self.oracles_config = parse_oracles_config(config)

    async def check_contract_operational(self, client) -> bool:
        """The app contract must be deployed and not paused."""
        try:
            await client.call("requireIsOperational")
        except RevertError as exc:
            logger.error("❌ App contract is not operational: %s", exc)
            return False
        except FlightSuretyError as exc:
            logger.error("❌ Error reaching the app contract: %s", exc)
            return False

        logger.info("✅ App contract is operational.")
        return True

    async def check_accounts(self, client) -> bool:
        """The node must expose enough unlocked accounts for the oracle pool."""
        try:
            accounts = await client.accounts()
        except FlightSuretyError as exc:
            logger.error("❌ Error reading node accounts: %s", exc)
            return False

        available = len(accounts) - self.oracles_config.first_account
        if available < 1:
            logger.error(
                "❌ No accounts available for oracles (node has %d, first_account is %d).",
                len(accounts),
                self.oracles_config.first_account,
            )
            return False
        if available < self.oracles_config.pool_size:
            logger.warning(
                "Only %d accounts available for a pool of %d oracles.",
                available,
                self.oracles_config.pool_size,
            )
        else:
            logger.info("✅ %d accounts available for oracles.", available)
        return True

    async def run_operation_checks(self, client) -> bool:
        """Run all the operation checks for the node."""
        logger.info(
            "-------------------- Running Operation Checks -----------------------"
        )
        contract_valid = await self.check_contract_operational(client)
        accounts_valid = await self.check_accounts(client)
        if not (contract_valid and accounts_valid):
            logger.info(
                "-------------------- Operation Checks Failed -----------------------"
            )
            return False

        logger.info(
            "-------------------- Operation Checks Passed -----------------------"
        )
        return True
