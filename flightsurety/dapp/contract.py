"""Dapp-side wrapper of the FlightSurety contracts."""

import logging
import time
from typing import Callable, List, Optional

from flightsurety.api.client import DATA
from flightsurety.core.oracle import InsurancePurchase
from flightsurety.utils.exceptions import RevertError

logger = logging.getLogger(__name__)

AIRLINES_COUNT = 5
PASSENGERS_COUNT = 5


class FlightSuretyDapp:
    """Actions available to the dapp user, issued from the node's accounts."""

    def __init__(
        self,
        client,
        premium_wei: int = 0,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.premium_wei = premium_wei
        self.clock = clock
        self.owner: Optional[str] = None
        self.airlines: List[str] = []
        self.passengers: List[str] = []

    async def initialize(self) -> None:
        """Split the node accounts into owner, airlines and passengers."""
        accounts = await self.client.accounts()
        self.owner = accounts[0]
        self.airlines = accounts[1 : 1 + AIRLINES_COUNT]
        self.passengers = accounts[
            1 + AIRLINES_COUNT : 1 + AIRLINES_COUNT + PASSENGERS_COUNT
        ]
        logger.debug(
            "owner %s, %d airlines, %d passengers",
            self.owner,
            len(self.airlines),
            len(self.passengers),
        )

    def _payload(self, flight: str, timestamp: Optional[int]) -> InsurancePurchase:
        if not self.airlines:
            raise RuntimeError("initialize() must run before issuing flight actions")
        if timestamp is None:
            timestamp = int(self.clock())
        return InsurancePurchase(
            airline=self.airlines[0], flight=flight, timestamp=timestamp
        )

    async def is_operational(self) -> bool:
        """False when the app contract rejects `requireIsOperational`."""
        try:
            await self.client.call("requireIsOperational", sender=self.owner, gas=50000)
        except RevertError as exc:
            logger.info("App contract is not operational: %s", exc)
            return False
        return True

    async def fetch_flight_status(
        self, flight: str, timestamp: Optional[int] = None
    ) -> InsurancePurchase:
        """Ask the oracles for the status of `flight`."""
        payload = self._payload(flight, timestamp)
        await self.client.send("fetchFlightStatus", payload.as_args(), sender=self.owner)
        return payload

    async def buy_insurance(
        self,
        flight: str,
        timestamp: Optional[int] = None,
        premium: Optional[int] = None,
    ) -> InsurancePurchase:
        """Buy insurance for `flight`; the payload reaches the contract unchanged."""
        payload = self._payload(flight, timestamp)
        value = self.premium_wei if premium is None else premium
        receipt = await self.client.send(
            "buyInsurance",
            payload.as_args(),
            sender=self.owner,
            value=value,
            contract=DATA,
        )
        logger.info("Insurance purchased in transaction %s", receipt["transactionHash"])
        return payload

    async def authorise_contract(self, address: str):
        """Allow `address` (normally the app contract) to call the data contract."""
        return await self.client.send(
            "authoriseContract", (address,), sender=self.owner, contract=DATA
        )

    async def fund(self, value: int, sender: Optional[str] = None):
        """Pay the airline funding fee into the data contract."""
        return await self.client.send(
            "fund", sender=sender or self.airlines[0], value=value, contract=DATA
        )

    async def register_airline(
        self, airline: str, name: str, sender: Optional[str] = None
    ):
        return await self.client.send(
            "registerAirline", (airline, name), sender=sender or self.airlines[0]
        )

    async def is_airline_registered(self, airline: str) -> bool:
        return bool(await self.client.call("isAirlineRegistered", (airline,)))

    async def set_operating_status(self, mode: bool, sender: Optional[str] = None):
        """Pause or resume the data contract; only the owner may do this."""
        return await self.client.send(
            "setOperatingStatus", (mode,), sender=sender or self.owner, contract=DATA
        )
