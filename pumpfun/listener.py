"""
Pump.fun launch listener.

Detects new token launches via WebSocket logsSubscribe on the Pump.fun program.
Flow:
  1. Subscribe to logs mentioning PUMP_FUN (commitment=confirmed)
  2. For each notification, keep only create+buy transactions (log pre-filter)
  3. Queue the signature; a fixed pool of workers fetches each tx via
     getTransaction (encoding=json, maxSupportedTransactionVersion=0)
  4. Decode the create instruction + balance deltas → LaunchEvent
  5. Hand the result to the journal

The socket reader never awaits a fetch, and outstanding fetches are
capped by the worker count. When the queue is full, candidates are dropped.
Auto-reconnects with exponential backoff on disconnect.
"""
import asyncio
import json
import logging

import aiohttp

from pumpfun.constants import PUMP_FUN
from pumpfun.decoder import parse_launch_event
from pumpfun.event import LaunchEvent
from pumpfun.filter import LogNotification, is_launch_candidate
from pumpfun.rpc import SubscriptionError
from pumpfun.transaction import TransactionRecord

logger = logging.getLogger("pump_listener")


class PumpFunListener:
    """
    Detects Pump.fun token launches with an initial buy on Solana mainnet.
    """

    def __init__(
        self,
        wss_url: str,
        rpc,
        journal,
        commitment: str = "confirmed",
        workers: int = 8,
        queue_size: int = 1000,
        session: aiohttp.ClientSession | None = None,
    ):
        self.wss_url = wss_url
        self.rpc = rpc
        self.journal = journal
        self.commitment = commitment
        self.workers = workers
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=queue_size)
        self._session = session
        self._worker_tasks: list[asyncio.Task] = []
        self._running = False
        self._subscribed_once = False
        # Stats
        self.notifications: int = 0
        self.candidates: int = 0
        self.dropped: int = 0
        self.fetched: int = 0
        self.not_found: int = 0
        self.reverted: int = 0
        self.errors: int = 0
        self.launches: int = 0
        self.rejected: int = 0

    async def start(self):
        """Connect to Solana WebSocket and listen for Pump.fun launches."""
        self._running = True
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=30)
            )
        self.start_workers()
        logger.info(f"Starting Pump.fun listener ({self.workers} fetch workers)")

        backoff = 1
        try:
            while self._running:
                try:
                    await self._connect_and_listen()
                    backoff = 1  # reset on clean exit
                except asyncio.CancelledError:
                    break
                except SubscriptionError:
                    if not self._subscribed_once:
                        raise
                    logger.error("Pump.fun resubscription refused, retrying")
                    await asyncio.sleep(min(backoff, 30))
                    backoff = min(backoff * 2, 30)
                except Exception as e:
                    logger.error(f"Solana WebSocket error: {e}")
                    await asyncio.sleep(min(backoff, 30))
                    backoff = min(backoff * 2, 30)
        finally:
            await self._stop_workers()
            if self._session and not self._session.closed:
                await self._session.close()

    async def stop(self):
        self._running = False
        await self._stop_workers()
        if self._session and not self._session.closed:
            await self._session.close()

    def start_workers(self):
        for i in range(self.workers):
            self._worker_tasks.append(
                asyncio.create_task(self._fetch_worker(), name=f"pump_fetch_{i}")
            )

    async def _stop_workers(self):
        for task in self._worker_tasks:
            task.cancel()
        if self._worker_tasks:
            await asyncio.gather(*self._worker_tasks, return_exceptions=True)
        self._worker_tasks = []

    async def _connect_and_listen(self):
        """Single WebSocket connection lifecycle."""
        logger.info("Connecting to Solana WebSocket...")

        async with self._session.ws_connect(
            self.wss_url,
            heartbeat=30,
            max_msg_size=0,  # no limit
        ) as ws:
            await ws.send_json({
                "jsonrpc": "2.0",
                "id": 1,
                "method": "logsSubscribe",
                "params": [
                    {"mentions": [PUMP_FUN]},
                    {"commitment": self.commitment},
                ],
            })

            # Read subscription confirmation
            resp = await ws.receive_json(timeout=10)
            sub_id = resp.get("result")
            if sub_id is None:
                raise SubscriptionError(
                    f"Pump.fun subscription failed: {resp.get('error', {})}"
                )

            self._subscribed_once = True
            logger.info(f"Pump.fun subscription active (id={sub_id})")

            async for msg in ws:
                if not self._running:
                    break
                if msg.type == aiohttp.WSMsgType.TEXT:
                    try:
                        data = json.loads(msg.data)
                        self.handle_message(data)
                    except Exception as e:
                        logger.debug(f"Message parse error: {e}")
                elif msg.type in (
                    aiohttp.WSMsgType.CLOSED,
                    aiohttp.WSMsgType.ERROR,
                ):
                    logger.warning("Solana WebSocket closed, reconnecting...")
                    break

    def handle_message(self, data) -> bool:
        """Filter one websocket message. Returns True if its signature was queued."""
        notification = LogNotification.from_message(data)
        if notification is None:
            return False
        self.notifications += 1

        signature = is_launch_candidate(notification)
        if signature is None:
            return False
        self.candidates += 1

        try:
            self._queue.put_nowait(signature)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(f"[pump-drop] fetch queue full, dropping sig={signature}")
            return False
        return True

    async def _fetch_worker(self):
        while True:
            signature = await self._queue.get()
            try:
                await self.process_signature(signature)
            except asyncio.CancelledError:
                raise
            except Exception:
                self.errors += 1
                logger.exception(f"Unhandled error processing sig={signature}")
            finally:
                self._queue.task_done()

    async def process_signature(self, signature: str) -> LaunchEvent | None:
        """Fetch one candidate transaction and decode it. Never raises."""
        try:
            result = await self.rpc.get_transaction(signature)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.errors += 1
            logger.error(f"Error fetching transaction sig={signature}: {e}")
            return None

        if result is None:
            self.not_found += 1
            logger.warning(f"Transaction not found sig={signature}")
            return None
        self.fetched += 1

        try:
            tx = TransactionRecord.from_rpc(result)
        except Exception as e:
            self.rejected += 1
            logger.warning(f"[pump-reject] malformed transaction sig={signature}: {e}")
            return None

        if tx.meta is not None and tx.meta.err is not None:
            self.reverted += 1
            logger.debug(f"[pump-skip] reverted sig={signature}")
            return None

        event = parse_launch_event(tx)
        if event is None:
            self.rejected += 1
        else:
            self.launches += 1
        self.journal.record(signature, event)
        return event

    def get_stats(self) -> dict:
        return {
            "notifications": self.notifications,
            "candidates": self.candidates,
            "dropped": self.dropped,
            "queued": self._queue.qsize(),
            "fetched": self.fetched,
            "not_found": self.not_found,
            "reverted": self.reverted,
            "errors": self.errors,
            "launches": self.launches,
            "rejected": self.rejected,
        }
