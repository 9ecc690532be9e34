"""
Minimal Solana JSON-RPC client over aiohttp.

Only getTransaction is needed. Raw JSON-RPC, no solana-py dependency.
"""
import asyncio
import logging
import time

import aiohttp

logger = logging.getLogger("pump_rpc")


class RpcError(Exception):
    """Transport failure or JSON-RPC error response."""


class SubscriptionError(Exception):
    """The node refused the logs subscription."""


class SolanaRpcClient:
    def __init__(
        self,
        http_url: str,
        commitment: str = "confirmed",
        timeout: float = 30.0,
        min_interval_ms: int = 0,
    ):
        self.http_url = http_url
        self.commitment = commitment
        self.timeout = timeout
        self.min_interval = min_interval_ms / 1000
        self._session: aiohttp.ClientSession | None = None
        self._lock = asyncio.Lock()
        self._last_call: float = 0.0
        self._request_id = 0

    async def _ensure_session(self):
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def _throttle(self):
        if self.min_interval <= 0:
            return
        async with self._lock:
            wait = self.min_interval - (time.time() - self._last_call)
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_call = time.time()

    async def call(self, method: str, params: list):
        await self._ensure_session()
        await self._throttle()
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        try:
            async with self._session.post(self.http_url, json=payload) as resp:
                if resp.status != 200:
                    raise RpcError(f"{method} HTTP {resp.status}")
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RpcError(f"{method} transport error: {e!r}") from e

        if data.get("error"):
            raise RpcError(f"{method} error: {data['error']}")
        return data.get("result")

    async def get_transaction(self, signature: str) -> dict | None:
        """
        Fetch a transaction with compiled instructions (encoding=json).
        Returns None if the node does not know the signature.
        """
        return await self.call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "json",
                    "commitment": self.commitment,
                    "maxSupportedTransactionVersion": 0,
                },
            ],
        )
