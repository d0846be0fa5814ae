"""Command-line dapp for the FlightSurety contracts"""

import argparse
import asyncio
import logging

from web3 import Web3

from flightsurety.app_setup import record_factory, setup_client, setup_logging
from flightsurety.dapp import DappActions, DappDisplay, FlightSuretyDapp
from flightsurety.utils.config_utils import load_config

ACTIONS = ("status", "submit-oracle", "purchase-insurance", "flight-status-update")


async def main(config_file, action, flight=None, network=None):
    """Run one dapp action and print its result section."""
    config = load_config(config_file)

    setup_logging(config)
    logging.setLogRecordFactory(record_factory)

    premium_ether = (config.get("Dapp") or {}).get("premium_ether", 0)
    client = setup_client(config, network)
    try:
        dapp = FlightSuretyDapp(client, premium_wei=Web3.to_wei(premium_ether, "ether"))
        await dapp.initialize()
        actions = DappActions(dapp, DappDisplay())

        if action == "status":
            return await actions.operational_status()
        if flight is None:
            raise SystemExit(f"'{action}' needs a flight number")
        if action == "submit-oracle":
            return await actions.submit_oracle(flight)
        if action == "purchase-insurance":
            return await actions.purchase_insurance(flight)
        return await actions.flight_status_update(flight)
    finally:
        await client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        prog="FlightSurety dapp",
        description="Trigger oracles and buy flight insurance.",
    )
    parser.add_argument(
        "-c",
        "--configfile",
        help="Specify a file to override default configuration",
        default="config.yml",
    )
    parser.add_argument("-n", "--network", help="Network entry to use", default=None)
    parser.add_argument("action", choices=ACTIONS)
    parser.add_argument("flight", nargs="?", help="Flight number, e.g. ND1309")

    arguments = parser.parse_args()

    asyncio.run(
        main(
            config_file=arguments.configfile,
            action=arguments.action,
            flight=arguments.flight,
            network=arguments.network,
        )
    )
