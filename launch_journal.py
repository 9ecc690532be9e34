"""
Launch journal: append-only log of every decoded launch candidate.

Writes one JSON line per fetched candidate to `launch_journal.jsonl`.
Write-only: nothing reads it back, restarts start from a clean slate.

Records:
  {"ts": ..., "signature": ..., "event": {...LaunchEvent...}}
  {"ts": ..., "signature": ..., "event": null}   ← decoder rejected it

Usage:
    journal = LaunchJournal()
    journal.record(signature, event)
"""
import json
import logging
import time
from pathlib import Path

import config

logger = logging.getLogger("journal")


class LaunchJournal:
    """Append-only JSONL sink for decoded launches."""

    def __init__(self, path: Path | None = None):
        self._path = path or Path(config.LAUNCH_JOURNAL_PATH)
        # Ensure parent dir exists
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Launch journal: {self._path}")

    def record(self, signature: str, event, ts: float | None = None) -> dict:
        """Log and append one result. `event` is a LaunchEvent or None."""
        record = {
            "ts": ts if ts is not None else time.time(),
            "signature": signature,
            "event": event.to_dict() if event is not None else None,
        }
        if event is not None:
            logger.info(
                f"[pump-launch] {event.mint} | curve={event.bonding_curve[:8]}... | "
                f"sol={event.initial_sol_balance:.3f} | "
                f"tokens={event.initial_token_balance:,.2f} (dec={event.token_decimals}) | "
                f"user={event.user[:8]}... | sig={signature}"
            )
        else:
            logger.info(f"[pump-none] sig={signature}")
        self._write(record)
        return record

    def _write(self, record: dict):
        """Append one JSON line to the journal file."""
        try:
            with open(self._path, "a") as f:
                f.write(json.dumps(record, default=str) + "\n")
        except Exception as e:
            logger.debug(f"Journal write failed: {e}")
