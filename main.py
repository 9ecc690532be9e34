"""
Pump.fun Launch Watcher: main orchestrator.

Subscribes to Pump.fun program logs on Solana, decodes every token launch
that bundles an initial buy, and records the launch accounts plus the
initial SOL / token liquidity to the launch journal.

Usage:
    python main.py                      # normal mode (reads .env)
    LOG_LEVEL=DEBUG python main.py      # show skipped notifications
"""
import asyncio
import logging
import signal as signal_module
import sys

import config
from launch_journal import LaunchJournal
from pumpfun.listener import PumpFunListener
from pumpfun.rpc import SolanaRpcClient, SubscriptionError

# ── Logging ──
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s | %(name)-14s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("main")
logging.getLogger("asyncio").setLevel(logging.WARNING)
logging.getLogger("aiohttp").setLevel(logging.WARNING)


class LaunchWatcher:
    """Main application: wires up all components and runs them concurrently."""

    def __init__(self):
        self.rpc = SolanaRpcClient(
            config.SOL_RPC_HTTP,
            commitment=config.COMMITMENT,
            timeout=config.RPC_TIMEOUT_SECONDS,
            min_interval_ms=config.RPC_MIN_INTERVAL_MS,
        )
        self.journal = LaunchJournal()
        self.listener = PumpFunListener(
            wss_url=config.SOL_RPC_WSS,
            rpc=self.rpc,
            journal=self.journal,
            commitment=config.COMMITMENT,
            workers=config.FETCH_WORKERS,
            queue_size=config.FETCH_QUEUE_SIZE,
        )
        self._tasks: list[asyncio.Task] = []

    async def start(self):
        logger.info("=" * 60)
        logger.info("  PUMP.FUN LAUNCH WATCHER")
        logger.info(f"  RPC:        {config.SOL_RPC_HTTP[:50]}")
        logger.info(f"  Commitment: {config.COMMITMENT}")
        logger.info(f"  Initial SOL: {config.MIN_INITIAL_SOL:g}-{config.MAX_INITIAL_SOL:g} SOL")
        logger.info(f"  Min tokens: {config.MIN_INITIAL_TOKEN:g}")
        logger.info(f"  Workers:    {config.FETCH_WORKERS} (queue {config.FETCH_QUEUE_SIZE})")
        logger.info("=" * 60)

        self._tasks = [
            asyncio.create_task(self.listener.start(), name="pump_listener"),
            asyncio.create_task(self._stats_loop(), name="stats"),
        ]

        logger.info("All systems running. Waiting for new launches...")

        # Returns once the listener ends: stop(), or a refused first subscription
        done, pending = await asyncio.wait(self._tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            if not task.cancelled() and task.exception():
                raise task.exception()

    async def stop(self):
        await self.listener.stop()
        for task in self._tasks:
            task.cancel()

    async def _stats_loop(self):
        while True:
            await asyncio.sleep(config.STATS_INTERVAL_SECONDS)
            stats = self.listener.get_stats()
            logger.info(
                f"[stats] notifications={stats['notifications']} "
                f"candidates={stats['candidates']} dropped={stats['dropped']} "
                f"queued={stats['queued']} fetched={stats['fetched']} "
                f"not_found={stats['not_found']} reverted={stats['reverted']} "
                f"errors={stats['errors']} launches={stats['launches']} "
                f"rejected={stats['rejected']}"
            )


async def main():
    watcher = LaunchWatcher()
    loop = asyncio.get_running_loop()
    for sig in (signal_module.SIGINT, signal_module.SIGTERM):
        loop.add_signal_handler(sig, lambda: asyncio.create_task(_shutdown(watcher)))
    try:
        await watcher.start()
    except SubscriptionError as e:
        logger.error(str(e))
        sys.exit(1)
    finally:
        await watcher.rpc.close()
    logger.info("Goodbye.")


async def _shutdown(watcher: LaunchWatcher):
    logger.info("Shutting down...")
    await watcher.stop()


if __name__ == "__main__":
    asyncio.run(main())
