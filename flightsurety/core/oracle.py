"""Oracle domain types shared by the node and the dapp."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Oracle:
    """A registered oracle account and the indexes the contract assigned to it."""

    account: str
    indexes: Tuple[int, ...]

    def holds(self, index: int) -> bool:
        """True when the contract assigned `index` to this oracle."""
        return int(index) in self.indexes


@dataclass(frozen=True)
class FlightStatusRequest:
    """An `OracleRequest` event emitted by the app contract."""

    index: int
    airline: str
    flight: str
    timestamp: int
    block_number: Optional[int] = None
    transaction_hash: Optional[str] = None
    log_index: Optional[int] = None

    @property
    def key(self) -> Tuple[int, str, str, int]:
        """Identifies the request independently of how it was delivered."""
        return (self.index, self.airline, self.flight, self.timestamp)

    @property
    def event_id(self) -> Optional[Tuple[str, int]]:
        """Log coordinates, or None for requests injected without a log."""
        if self.transaction_hash is None or self.log_index is None:
            return None
        return (self.transaction_hash, self.log_index)


@dataclass(frozen=True)
class OracleResponse:
    """Arguments of one `submitOracleResponse` transaction."""

    index: int
    airline: str
    flight: str
    timestamp: int
    status_code: int

    def as_args(self) -> tuple:
        return (self.index, self.airline, self.flight, self.timestamp, self.status_code)


@dataclass(frozen=True)
class InsurancePurchase:
    """Payload the dapp sends for both insurance purchases and status requests."""

    airline: str
    flight: str
    timestamp: int

    def as_args(self) -> tuple:
        return (self.airline, self.flight, self.timestamp)


@dataclass
class OraclePool:
    """Oracles registered during this run, keyed by account."""

    oracles: Dict[str, Oracle] = field(default_factory=dict)

    def add(self, oracle: Oracle) -> None:
        self.oracles[oracle.account] = oracle

    def matching(self, index: int) -> List[Oracle]:
        """Oracles whose assigned indexes contain `index`."""
        return [oracle for oracle in self.oracles.values() if oracle.holds(index)]

    @property
    def accounts(self) -> List[str]:
        return list(self.oracles)

    def __len__(self) -> int:
        return len(self.oracles)

    def __iter__(self) -> Iterator[Oracle]:
        return iter(self.oracles.values())

    def __contains__(self, account) -> bool:
        return account in self.oracles
