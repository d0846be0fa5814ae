"""Binds the dapp actions to the contracts and renders their results."""

import logging
import sys
from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from flightsurety.dapp.contract import FlightSuretyDapp
from flightsurety.utils.exceptions import FlightSuretyError

logger = logging.getLogger(__name__)


@dataclass
class DisplayResult:
    """One row of a result section."""

    label: str
    error: Optional[Exception] = None
    value: Any = None

    def text(self) -> str:
        return str(self.error) if self.error else str(self.value)


class DappDisplay:
    """Writes result sections to a text stream."""

    def __init__(self, stream: TextIO = sys.stdout):
        self.stream = stream
        self.sections: List[str] = []

    @staticmethod
    def render(title: str, description: str, results: List[DisplayResult]) -> str:
        lines = [title, description]
        width = max((len(result.label) for result in results), default=0)
        for result in results:
            lines.append(f"  {result.label.ljust(width)}  {result.text()}")
        return "\n".join(lines)

    def display(self, title: str, description: str, results: List[DisplayResult]) -> str:
        section = self.render(title, description, results)
        self.sections.append(section)
        print(section, file=self.stream)
        return section

    def alert(self, message: str, failed: bool = True) -> None:
        """Notice printed ahead of the result section."""
        logger.log(logging.ERROR if failed else logging.INFO, message)
        print(f"!! {message}", file=self.stream)


class DappActions:
    """The user actions of the dapp, each issuing one call or send."""

    def __init__(self, dapp: FlightSuretyDapp, display: DappDisplay):
        self.dapp = dapp
        self.display = display

    async def operational_status(self) -> DisplayResult:
        try:
            result = DisplayResult("Operational Status", value=await self.dapp.is_operational())
        except FlightSuretyError as exc:
            self.display.alert("Could not read operational status")
            result = DisplayResult("Operational Status", error=exc)
        self.display.display(
            "Operational Status", "Check if contract is operational", [result]
        )
        return result

    async def submit_oracle(self, flight: str) -> DisplayResult:
        """Trigger the oracles for `flight`."""
        result = await self._flight_action(
            "Fetch Flight Status", self.dapp.fetch_flight_status, flight
        )
        self.display.display("Oracles", "Trigger oracles", [result])
        return result

    async def purchase_insurance(self, flight: str) -> DisplayResult:
        result = await self._flight_action(
            "Buy insurance", self.dapp.buy_insurance, flight
        )
        if not result.error:
            self.display.alert("Successfully purchased insurance", failed=False)
        self.display.display("Buy", "Buy Insurance", [result])
        return result

    async def flight_status_update(self, flight: str) -> DisplayResult:
        # Shares the purchase call with purchase_insurance.
        result = await self._flight_action(
            "Flight update", self.dapp.buy_insurance, flight
        )
        self.display.display("Oracles", "flight update", [result])
        return result

    async def _flight_action(self, label: str, action, flight: str) -> DisplayResult:
        try:
            payload = await action(flight)
        except FlightSuretyError as exc:
            self.display.alert("Transaction failed")
            return DisplayResult(label, error=exc)
        return DisplayResult(label, value=f"{payload.flight} {payload.timestamp}")
