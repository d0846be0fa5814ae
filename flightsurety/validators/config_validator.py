"""Configuration Validator Module."""

import logging

from web3 import Web3

from flightsurety.core.status import STATUS_POLICIES
from flightsurety.utils.config_utils import DEFAULT_NETWORK

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Configuration Validator Class."""

    REQUIRED_NETWORK_KEYS = ["url", "app_address"]
    POSITIVE_ORACLE_KEYS = ["pool_size", "max_concurrency", "workers"]

    def __init__(self, config: dict):
        """
        Initialize the ConfigValidator with the provided configuration.
        Args:
            config (dict): The configuration dictionary to validate.
        """
        self.config = config

    def validate_network_keys(self) -> bool:
        """Ensure the selected network entry exists and holds valid addresses."""
        name = self.config.get("network", DEFAULT_NETWORK)
        network_section = (self.config.get("Networks") or {}).get(name)
        if not network_section:
            logger.error("❌ No entry for network '%s' in Networks section.", name)
            return False

        missing_keys = [
            key for key in self.REQUIRED_NETWORK_KEYS if not network_section.get(key)
        ]
        if missing_keys:
            logger.error(
                "❌ Missing required keys for network '%s': %s",
                name,
                ", ".join(missing_keys),
            )
            return False

        for key in ("app_address", "data_address"):
            address = network_section.get(key)
            if address and not Web3.is_address(address):
                logger.error("❌ '%s' of network '%s' is not an address.", key, name)
                return False

        if not network_section.get("data_address"):
            logger.warning(
                "'data_address' not specified for network '%s'. Using 'app_address'.",
                name,
            )

        logger.info("✅ Network '%s' Configurations are present.", name)
        return True

    def validate_oracles_keys(self) -> bool:
        """Ensure the Oracles section holds sane values, when present."""
        oracles_section = self.config.get("Oracles") or {}
        if not oracles_section:
            logger.warning("Oracles section not specified. Using defaults.")
            return True

        for key in self.POSITIVE_ORACLE_KEYS:
            if key in oracles_section:
                value = oracles_section[key]
                if not isinstance(value, int) or value < 1:
                    logger.error(
                        "❌ '%s' in Oracles section must be a positive integer.", key
                    )
                    return False

        policy = oracles_section.get("status_policy")
        if policy is not None and str(policy).lower() not in STATUS_POLICIES:
            logger.error(
                "❌ Unknown status_policy '%s'. Options: %s",
                policy,
                ", ".join(STATUS_POLICIES),
            )
            return False

        logger.info("✅ Oracles Configurations are valid.")
        return True

    def run_config_validation(self) -> bool:
        """
        Run all configuration validation checks.
        Returns:
            bool: True if all validations pass, False otherwise.
        """
        logger.info(
            "-------------------- Running Configuration Checks -----------------------"
        )
        network_valid = self.validate_network_keys()
        oracles_valid = self.validate_oracles_keys()

        if not (network_valid and oracles_valid):
            logger.error("Configuration validation failed.")
            logger.info(
                "-------------------- Configuration Validation Failed ------------------"
            )
            return False
        logger.info(
            "-------------------- Configuration Validation Passed ------------------"
        )
        return True
