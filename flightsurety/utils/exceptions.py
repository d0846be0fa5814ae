"""Exceptions raised while talking to the FlightSurety contracts."""


class FlightSuretyError(Exception):
    """Base class for all errors raised by this package."""


class RpcError(FlightSuretyError):
    """The JSON-RPC node is unreachable or returned a malformed response."""

    def __init__(self, method: str, reason):
        self.method = method
        self.reason = reason
        super().__init__(f"RPC failure in {method}: {reason}")


class RevertError(FlightSuretyError):
    """The contract rejected the call or transaction."""

    def __init__(self, method: str, reason, tx_hash: str = None):
        self.method = method
        self.reason = reason
        self.tx_hash = tx_hash
        super().__init__(f"{method} reverted: {reason}")


class ConfigError(FlightSuretyError):
    """Missing or invalid configuration entry."""
