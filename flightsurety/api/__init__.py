"""Chain client and HTTP surface."""

from .client import APP, DATA, FlightSuretyClient, load_abi, to_hex
