"""Main file for the oracle node"""

import argparse
import asyncio
import logging

from flightsurety.api.server import start_server
from flightsurety.app_setup import (
    record_factory,
    register_oracles,
    setup_alerts_manager,
    setup_client,
    setup_logging,
    setup_responder,
)
from flightsurety.db.database import close_db, configure_database, init_db
from flightsurety.oracle_checker import OracleChecker
from flightsurety.utils.config_utils import load_config, parse_oracles_config


async def main(config_file):
    """Main function for the oracle node."""
    config = load_config(config_file)

    setup_logging(config)
    logging.setLogRecordFactory(record_factory)

    try:
        oracle_checker = OracleChecker(config)
        await oracle_checker.run_initial_checks()
    except Exception as e:  # pylint: disable=broad-except
        logging.error("Node checks failed: %s", e)
        return

    try:
        configure_database((config.get("database") or {}).get("url"))
        await init_db()
        logging.info("Database initialized successfully.")
    except Exception as e:  # pylint: disable=broad-except
        logging.error("Database initialization failed: %s", e)
        return

    server_config = config.get("Server") or {}
    client = None
    server = None
    responder = None
    try:
        client = setup_client(config)
        await oracle_checker.run_operation_checks(client)

        server = await start_server(
            server_config.get("host", "0.0.0.0"), int(server_config.get("port", 3000))
        )

        alerts_manager = setup_alerts_manager(config, client.network.name)
        pool = await register_oracles(parse_oracles_config(config), client, alerts_manager)

        responder = setup_responder(config, client, pool)
        await responder.run()
    except Exception as e:  # pylint: disable=broad-except
        logging.error("Oracle node encountered an error: %s", e)
    finally:
        if responder is not None:
            await responder.stop()
        if server is not None:
            await server.cleanup()
        if client is not None:
            await client.close()
        await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        prog="FlightSurety oracle node",
        description="Registers oracles and answers flight status requests.",
    )

    parser.add_argument(
        "-c",
        "--configfile",
        help="Specify a file to override default configuration",
        default="config.yml",
    )

    arguments = parser.parse_args()

    try:
        asyncio.run(main(config_file=arguments.configfile))
    except KeyboardInterrupt:
        logging.info("Oracle node stopped.")
