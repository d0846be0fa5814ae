"""JSON-RPC client for the FlightSurety app and data contracts."""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from flightsurety.core.oracle import FlightStatusRequest
from flightsurety.utils.config_utils import NetworkConfig, get_network_config
from flightsurety.utils.exceptions import RevertError, RpcError

logger = logging.getLogger("client")
logging.Formatter.converter = time.gmtime

APP = "app"
DATA = "data"

ABI_DIR = Path(__file__).resolve().parents[1] / "abi"
CONTRACT_NAMES = {APP: "FlightSuretyApp", DATA: "FlightSuretyData"}

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


def load_abi(name: str, build_dir: Optional[str] = None) -> list:
    """Load a contract ABI from a truffle build directory or the packaged copy."""
    candidates = []
    if build_dir:
        candidates.append(Path(build_dir) / f"{name}.json")
    candidates.append(ABI_DIR / f"{name}.json")

    for path in candidates:
        if path.exists():
            with path.open("r", encoding="utf-8") as f:
                artifact = json.load(f)
            # Truffle artifacts wrap the ABI; a bare ABI is a list.
            return artifact["abi"] if isinstance(artifact, dict) else artifact
    raise FileNotFoundError(
        f"Could not find {name}.json. Tried: {', '.join(str(c) for c in candidates)}"
    )


class FlightSuretyClient:
    """Typed call/send access to both contracts over one shared provider."""

    def __init__(
        self,
        w3: AsyncWeb3,
        app_contract,
        data_contract,
        network: Optional[NetworkConfig] = None,
        receipt_timeout: float = 120,
    ):
        self.w3 = w3
        self.network = network
        self.receipt_timeout = receipt_timeout
        self._contracts = {APP: app_contract, DATA: data_contract}

    @classmethod
    def from_config(
        cls, config: Dict, network: Optional[str] = None
    ) -> "FlightSuretyClient":
        """Build the client for the named network entry of the configuration."""
        network_config = get_network_config(config, network)
        contracts_config = config.get("Contracts") or {}
        build_dir = contracts_config.get("build_dir")
        timeout = contracts_config.get("request_timeout", 30)

        w3 = AsyncWeb3(
            AsyncHTTPProvider(network_config.url, request_kwargs={"timeout": timeout})
        )
        app_contract = w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(network_config.app_address),
            abi=load_abi(CONTRACT_NAMES[APP], build_dir),
        )
        data_contract = w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(network_config.data_address),
            abi=load_abi(CONTRACT_NAMES[DATA], build_dir),
        )
        logger.info(
            "Client for network %s at %s (app %s, data %s)",
            network_config.name,
            network_config.url,
            network_config.app_address,
            network_config.data_address,
        )
        return cls(
            w3,
            app_contract,
            data_contract,
            network=network_config,
            receipt_timeout=contracts_config.get("receipt_timeout", 120),
        )

    @property
    def app(self):
        return self._contracts[APP]

    @property
    def data(self):
        return self._contracts[DATA]

    def contract(self, name: str):
        """Contract proxy by role name ('app' or 'data')."""
        try:
            return self._contracts[name]
        except KeyError as exc:
            raise ValueError(f"Unknown contract '{name}'") from exc

    def _function(self, contract: str, method: str, args: Sequence[Any]):
        return getattr(self.contract(contract).functions, method)(*args)

    async def call(
        self,
        method: str,
        args: Sequence[Any] = (),
        sender: Optional[str] = None,
        contract: str = APP,
        gas: Optional[int] = None,
    ) -> Any:
        """Read-only invocation; returns the decoded result."""
        tx_params = _tx_params(sender, gas=gas)
        try:
            return await self._function(contract, method, args).call(tx_params)
        except ContractLogicError as exc:
            raise RevertError(method, exc) from exc
        except Web3Exception as exc:
            raise _classify(method, exc) from exc
        except TRANSPORT_ERRORS as exc:
            raise RpcError(method, exc) from exc

    async def send(
        self,
        method: str,
        args: Sequence[Any] = (),
        sender: Optional[str] = None,
        value: Optional[int] = None,
        contract: str = APP,
        gas: Optional[int] = None,
    ):
        """State-changing invocation; waits for the receipt and returns it.

        Sends issued concurrently from the same process are not ordered
        relative to each other.
        """
        if sender is None:
            raise ValueError(f"send({method}) needs a sender account")

        tx_params = _tx_params(sender, value=value, gas=gas)
        try:
            tx_hash = await self._function(contract, method, args).transact(tx_params)
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout
            )
        except ContractLogicError as exc:
            raise RevertError(method, exc) from exc
        except TimeExhausted as exc:
            raise RpcError(method, exc) from exc
        except Web3Exception as exc:
            raise _classify(method, exc) from exc
        except TRANSPORT_ERRORS as exc:
            raise RpcError(method, exc) from exc

        if receipt["status"] == 0:
            raise RevertError(
                method, "transaction reverted", tx_hash=to_hex(receipt["transactionHash"])
            )
        logger.debug("%s mined in block %s", method, receipt["blockNumber"])
        return receipt

    async def accounts(self) -> List[str]:
        """Accounts unlocked on the node."""
        try:
            return list(await self.w3.eth.accounts)
        except (Web3Exception, *TRANSPORT_ERRORS) as exc:
            raise RpcError("eth_accounts", exc) from exc

    async def block_number(self) -> int:
        """Current chain head."""
        try:
            return await self.w3.eth.block_number
        except (Web3Exception, *TRANSPORT_ERRORS) as exc:
            raise RpcError("eth_blockNumber", exc) from exc

    async def get_balance(self, account: str) -> int:
        """Balance of `account` in wei."""
        try:
            return await self.w3.eth.get_balance(account)
        except (Web3Exception, *TRANSPORT_ERRORS) as exc:
            raise RpcError("eth_getBalance", exc) from exc

    async def is_connected(self) -> bool:
        try:
            return await self.w3.is_connected()
        except TRANSPORT_ERRORS:
            return False

    async def get_oracle_requests(
        self, from_block: int, to_block: int
    ) -> List[FlightStatusRequest]:
        """Decode the `OracleRequest` events emitted in a block range."""
        try:
            logs = await self.app.events.OracleRequest().get_logs(
                from_block=from_block, to_block=to_block
            )
        except (Web3Exception, *TRANSPORT_ERRORS) as exc:
            raise RpcError("eth_getLogs", exc) from exc
        return [self.to_request(log) for log in logs]

    @staticmethod
    def to_request(log) -> FlightStatusRequest:
        """Convert a decoded `OracleRequest` log entry."""
        args = log["args"]
        return FlightStatusRequest(
            index=int(args["index"]),
            airline=args["airline"],
            flight=args["flight"],
            timestamp=int(args["flightTimestamp"]),
            block_number=log.get("blockNumber"),
            transaction_hash=to_hex(log.get("transactionHash")),
            log_index=log.get("logIndex"),
        )

    async def close(self) -> None:
        """Release the provider's HTTP session."""
        disconnect = getattr(self.w3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()


def _tx_params(
    sender: Optional[str], value: Optional[int] = None, gas: Optional[int] = None
) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if sender is not None:
        params["from"] = sender
    if value:
        params["value"] = int(value)
    if gas is not None:
        params["gas"] = int(gas)
    return params


def _classify(method: str, exc: Exception) -> Exception:
    """Nodes such as ganache report reverts as plain RPC errors."""
    if "revert" in str(exc).lower():
        return RevertError(method, exc)
    return RpcError(method, exc)


def to_hex(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        hexed = value.hex()
        return hexed if hexed.startswith("0x") else f"0x{hexed}"
    return str(value)
