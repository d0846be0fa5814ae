"""Oracle request listener and response dispatcher"""

import asyncio
import itertools
import logging
import time
from collections import OrderedDict
from enum import Enum
from typing import Dict, Hashable, List, Optional, Tuple

from .api.client import to_hex
from .core.oracle import FlightStatusRequest, Oracle, OraclePool, OracleResponse
from .core.status import StatusPolicy, random_status
from .db.service import record, store_operational_error, store_oracle_response
from .utils.exceptions import FlightSuretyError

logger = logging.getLogger("runner")
logging.Formatter.converter = time.gmtime


class CoordinatorState(Enum):
    """Responder lifecycle (IDLE, SUBSCRIBED) and per-request phases.

    `OracleResponder.state` only ever holds IDLE or SUBSCRIBED. MATCHING and
    RESPONDING are tracked per request in `OracleResponder.in_flight`.
    """

    IDLE = "idle"
    SUBSCRIBED = "subscribed"
    MATCHING = "matching"
    RESPONDING = "responding"


class SeenKeys:
    """Insertion-ordered set that forgets its oldest keys past `maxsize`."""

    def __init__(self, maxsize: int = 10000):
        self.maxsize = maxsize
        self._keys: "OrderedDict[Hashable, None]" = OrderedDict()

    def add(self, key: Hashable) -> bool:
        """Remember `key`; False when it was already known."""
        if key in self._keys:
            return False
        self._keys[key] = None
        if len(self._keys) > self.maxsize:
            self._keys.popitem(last=False)
        return True

    def __contains__(self, key) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)


class OracleResponder:
    """Listens for OracleRequest events and answers with every matching oracle"""

    def __init__(
        self,
        client,
        pool: OraclePool,
        choose_status: StatusPolicy = random_status,
        poll_interval: float = 2.0,
        workers: int = 2,
        max_concurrency: int = 5,
        gas: Optional[int] = None,
        refresh_indexes: bool = False,
        queue_size: int = 100,
    ):
        self.client = client
        self.pool = pool
        self.choose_status = choose_status
        self.poll_interval = poll_interval
        self.workers = max(1, workers)
        self.gas = gas
        self.refresh_indexes = refresh_indexes
        self.state = CoordinatorState.IDLE
        self.in_flight: Dict[int, Tuple[FlightStatusRequest, CoordinatorState]] = {}
        self._request_ids = itertools.count()
        self.last_block: Optional[int] = None
        self._queue: "asyncio.Queue[FlightStatusRequest]" = asyncio.Queue(
            maxsize=queue_size
        )
        self._semaphore = asyncio.Semaphore(max(1, max_concurrency))
        self._seen_events = SeenKeys()
        self._submitted = SeenKeys()
        self._tasks: List[asyncio.Task] = []

    @property
    def network_name(self) -> str:
        network = getattr(self.client, "network", None)
        return network.name if network else "unknown"

    async def subscribe(self) -> int:
        """Start listening from the current head; later calls change nothing."""
        if self.state is not CoordinatorState.IDLE:
            logger.debug("Already subscribed from block %s", self.last_block)
            return self.last_block

        self.last_block = await self.client.block_number()
        self.state = CoordinatorState.SUBSCRIBED
        logger.info(
            "Listening for OracleRequest events after block %d with %d oracles",
            self.last_block,
            len(self.pool),
        )
        return self.last_block

    async def run(self):
        """Poll for requests and dispatch responses until cancelled"""
        await self.subscribe()
        self._tasks = [asyncio.create_task(self._poll_events(), name="request-poller")]
        self._tasks.extend(
            asyncio.create_task(self._worker(), name=f"response-worker-{number}")
            for number in range(self.workers)
        )
        try:
            await asyncio.gather(*self._tasks)
        finally:
            await self.stop()

    async def stop(self):
        """Cancel the poller, the workers and any in-flight submissions."""
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self.state = CoordinatorState.IDLE
        logger.info("Oracle responder stopped")

    async def poll_once(self) -> int:
        """Queue the requests emitted since the last poll; returns how many."""
        head = await self.client.block_number()
        if head <= self.last_block:
            return 0

        requests = await self.client.get_oracle_requests(self.last_block + 1, head)
        self.last_block = head

        queued = 0
        for request in requests:
            if await self.enqueue(request):
                queued += 1
        return queued

    async def enqueue(self, request: FlightStatusRequest) -> bool:
        """Hand a request to the workers unless the same log was seen already."""
        event_id = request.event_id
        if event_id is not None and not self._seen_events.add(event_id):
            logger.debug("Ignoring duplicate delivery of %s", event_id)
            return False
        await self._queue.put(request)
        return True

    async def _poll_events(self):
        while True:
            start_time = time.time()
            try:
                queued = await self.poll_once()
                if queued:
                    logger.info("Queued %d oracle requests", queued)
            except FlightSuretyError as exc:
                logger.error("Polling for oracle requests failed: %r", exc)
                await record(store_operational_error, exc, context="poll")
            time_elapsed = time.time() - start_time
            await asyncio.sleep(max(self.poll_interval - time_elapsed, 0))

    async def _worker(self):
        while True:
            request = await self._queue.get()
            try:
                await self.handle_request(request)
            except Exception as exc:  # pylint: disable=broad-except
                logger.critical("Failed to handle %s: %r", request, exc)
            finally:
                self._queue.task_done()

    async def join(self):
        """Wait until every queued request has been handled."""
        await self._queue.join()

    async def handle_request(self, request: FlightStatusRequest) -> List[str]:
        """Submit a response from every oracle holding the request's index.

        Returns the accounts whose submissions the contract accepted.
        """
        logger.info(
            "OracleRequest index=%d airline=%s flight=%s timestamp=%d",
            request.index,
            request.airline,
            request.flight,
            request.timestamp,
        )
        request_id = next(self._request_ids)
        self.in_flight[request_id] = (request, CoordinatorState.MATCHING)
        try:
            matches = await self.match(request)
            if not matches:
                logger.info("No registered oracle holds index %d", request.index)
                return []

            self.in_flight[request_id] = (request, CoordinatorState.RESPONDING)
            results = await asyncio.gather(
                *(self._respond(oracle, request) for oracle in matches)
            )
        finally:
            del self.in_flight[request_id]
        return [account for account in results if account is not None]

    async def match(self, request: FlightStatusRequest) -> List[Oracle]:
        """Oracles whose index set contains the request's index."""
        if not self.refresh_indexes:
            return self.pool.matching(request.index)

        matches = []
        for oracle in list(self.pool):
            try:
                indexes = tuple(
                    int(index)
                    for index in await self.client.call(
                        "getMyIndexes", sender=oracle.account
                    )
                )
            except FlightSuretyError as exc:
                logger.warning(
                    "Using cached indexes for %s: %s", oracle.account, exc
                )
                indexes = oracle.indexes
            if indexes != oracle.indexes:
                oracle = Oracle(account=oracle.account, indexes=indexes)
                self.pool.add(oracle)
            if oracle.holds(request.index):
                matches.append(oracle)
        return matches

    async def _respond(
        self, oracle: Oracle, request: FlightStatusRequest
    ) -> Optional[str]:
        """Submit one oracle's response; rejections are logged, not retried."""
        if not self._submitted.add((oracle.account, request.key)):
            logger.debug("%s already answered %s", oracle.account, request.key)
            return None

        response = OracleResponse(
            index=request.index,
            airline=request.airline,
            flight=request.flight,
            timestamp=request.timestamp,
            status_code=self.choose_status(request),
        )

        async with self._semaphore:
            try:
                receipt = await self.client.send(
                    "submitOracleResponse",
                    response.as_args(),
                    sender=oracle.account,
                    gas=self.gas,
                )
            except FlightSuretyError as exc:
                logger.warning(
                    "Response from %s for %s %s rejected: %s",
                    oracle.account,
                    request.flight,
                    request.timestamp,
                    exc,
                )
                await record(
                    store_oracle_response,
                    self.network_name,
                    oracle.account,
                    response,
                    outcome="rejected",
                    error=exc,
                )
                return None

        logger.info(
            "Oracle %s reported status %d for %s",
            oracle.account,
            response.status_code,
            request.flight,
        )
        await record(
            store_oracle_response,
            self.network_name,
            oracle.account,
            response,
            outcome="submitted",
            tx_hash=to_hex(receipt["transactionHash"]),
        )
        return oracle.account

