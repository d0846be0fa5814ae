"""Command-line rendition of the FlightSurety dapp."""

from .contract import FlightSuretyDapp
from .display import DappActions, DappDisplay, DisplayResult
