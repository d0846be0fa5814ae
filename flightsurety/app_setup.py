"""This module contains the functions to setup logging, the chain client and the oracle services."""

import logging
from logging.config import dictConfig
from typing import Optional

from flightsurety.api.client import FlightSuretyClient
from flightsurety.core.oracle import OraclePool
from flightsurety.core.registration import OracleRegistry
from flightsurety.core.status import choose_status_policy
from flightsurety.logfiles.logging_config import LEVEL_COLORS, get_log_config
from flightsurety.runner import OracleResponder
from flightsurety.utils.alerts import AlertManager
from flightsurety.utils.config_utils import OraclesConfig, parse_oracles_config

logger = logging.getLogger(__name__)


# Setup Logging
def setup_logging(config):
    """Setup the logging configuration based on the specified configuration."""
    dictConfig(get_log_config(config.get("Logging")))


original_log_record_factory = logging.getLogRecordFactory()


def record_factory(*args, **kwargs):
    """Factory function for creating log records."""
    record = original_log_record_factory(*args, **kwargs)
    record.level_color = LEVEL_COLORS[min(record.levelno // 10, len(LEVEL_COLORS) - 1)]
    record.end_color = "\033[0m"
    return record


# Setup Client
def setup_client(config, network: Optional[str] = None) -> FlightSuretyClient:
    """Setup the contract client for the selected network."""
    return FlightSuretyClient.from_config(config, network)


def setup_alerts_manager(config, network_name: str) -> Optional[AlertManager]:
    """Setup the AlertManager based on the provided configuration."""
    alerts_config = config.get("Alerts") or {}
    notification_configs = alerts_config.get("notifications", [])

    if not notification_configs:
        logger.warning(
            "No alert notifications configured. AlertManager will not be initialized."
        )
        return None

    alert_config = {
        "cooldown": alerts_config.get("cooldown", 1800),
        "thresholds": alerts_config.get("thresholds", {}),
    }

    logger.info(
        "Initializing AlertManager with %d notification configs",
        len(notification_configs),
    )

    return AlertManager(
        network_name=network_name,
        alert_config=alert_config,
        notification_configs=notification_configs,
    )


async def register_oracles(
    oracles_config: OraclesConfig,
    client: FlightSuretyClient,
    alerts_manager: Optional[AlertManager] = None,
) -> OraclePool:
    """Register the oracle pool from the node's unlocked accounts."""
    accounts = await client.accounts()
    registry = OracleRegistry(
        client,
        max_concurrency=oracles_config.max_concurrency,
        gas=oracles_config.gas,
        alerts_manager=alerts_manager,
    )
    return await registry.register_all(
        accounts[oracles_config.first_account :], oracles_config.pool_size
    )


# Setup Responder
def setup_responder(
    config, client: FlightSuretyClient, pool: OraclePool
) -> OracleResponder:
    """Setup the oracle responder based on the specified configuration."""
    oracles_config = parse_oracles_config(config)
    return OracleResponder(
        client,
        pool,
        choose_status=choose_status_policy(oracles_config.status_policy),
        poll_interval=oracles_config.poll_interval,
        workers=oracles_config.workers,
        max_concurrency=oracles_config.max_concurrency,
        gas=oracles_config.gas,
        refresh_indexes=oracles_config.refresh_indexes,
    )
