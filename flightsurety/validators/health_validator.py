"""Module for validating the health of the JSON-RPC node"""

import asyncio
import logging

import aiohttp

from flightsurety.utils.config_utils import DEFAULT_NETWORK

logger = logging.getLogger(__name__)
timeout = aiohttp.ClientTimeout(total=10)


class HealthCheckValidator:
    """Validates that the configured JSON-RPC node answers requests."""

    def __init__(self, config):
        """Initialize with config data."""
        self.config = config

    async def check_rpc_health(self, session: aiohttp.ClientSession, url: str) -> bool:
        """Ask the node for its client version over plain JSON-RPC."""
        payload = {
            "jsonrpc": "2.0",
            "method": "web3_clientVersion",
            "params": [],
            "id": 1,
        }
        try:
            async with session.post(url, json=payload) as response:
                if response.status != 200:
                    logger.error(
                        "❌ RPC health check failed with status code %d.",
                        response.status,
                    )
                    return False

                body = await response.json(content_type=None)
                if "result" not in body:
                    logger.error(
                        "❌ RPC node at %s answered without a result: %s",
                        url,
                        body.get("error"),
                    )
                    return False

                logger.info("✅ RPC node is healthy: %s", body["result"])
                return True
        except asyncio.TimeoutError:
            logger.error("❌ RPC health check timed out.")
            return False
        except (aiohttp.ClientError, ValueError) as error:
            logger.error("❌ Error during health check for %s: %s", url, error)
            return False

    async def run_health_checks(self) -> bool:
        """Run all the health checks for external services."""
        logger.info(
            "-------------------- Running Health Checks -----------------------"
        )
        name = self.config.get("network", DEFAULT_NETWORK)
        url = ((self.config.get("Networks") or {}).get(name) or {}).get("url")
        if not url:
            logger.error("❌ No RPC url configured for network '%s'.", name)
            return False

        async with aiohttp.ClientSession(timeout=timeout) as session:
            is_healthy = await self.check_rpc_health(session, url)

        if not is_healthy:
            logger.error("❌ One or more health checks failed.")
            logger.info(
                "-------------------- Health Checks Failed -----------------------"
            )
            return False

        logger.info("✅ All external services are healthy.")
        logger.info("-------------------- Health Checks Passed -----------------------")
        return True
