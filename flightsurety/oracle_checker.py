"""Start-up checks run before the node registers oracles."""

import logging

from flightsurety.validators import (
    ConfigValidator,
    HealthCheckValidator,
    OperationValidator,
)

logger = logging.getLogger(__name__)


class OracleChecker:
    """Runs the config, RPC health and contract checks; exits the process on failure."""

    def __init__(self, config):
        self.config_validator = ConfigValidator(config)
        self.health_validator = HealthCheckValidator(config)
        self.operation_validator = OperationValidator(config)

    def welcome_message(self):
        """Banner logged before the checks."""
        logger.info(
            "------------------------------------------------------------------------------"
        )
        logger.info("FlightSurety oracle node")
        logger.info(
            "------------------------------------------------------------------------------"
        )

    async def run_initial_checks(self):
        """Run all node health and config checks."""
        self.welcome_message()

        config_valid = self.config_validator.run_config_validation()
        health_valid = await self.health_validator.run_health_checks()

        if not (config_valid and health_valid):
            logger.error("Terminating application.")
            raise SystemExit(1)
        logger.info("Initial Validations passed.")

    async def run_operation_checks(self, client) -> bool:
        """Run checks against the deployed contracts."""
        valid = await self.operation_validator.run_operation_checks(client)
        if not valid:
            logger.error("Terminating application.")
            raise SystemExit(1)
        logger.info("Operation Checks Passed.")
        return True
