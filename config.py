"""
Configuration loader: reads .env and exposes all settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# ── Solana RPC ─────────────────────────────────────────────────
# Helius recommended (free tier: 100k credits/day). Public endpoint is unreliable.
SOL_RPC_WSS = os.getenv("SOL_RPC_WSS", "wss://api.mainnet-beta.solana.com")
SOL_RPC_HTTP = os.getenv("SOL_RPC_HTTP", "https://api.mainnet-beta.solana.com")
# Both the logs subscription and getTransaction use the same commitment
COMMITMENT = os.getenv("COMMITMENT", "confirmed")
RPC_TIMEOUT_SECONDS = float(os.getenv("RPC_TIMEOUT_SECONDS", "30"))
# Minimum spacing between getTransaction calls (0 = no spacing).
# Public endpoints throttle hard; 100ms keeps Helius free tier happy.
RPC_MIN_INTERVAL_MS = int(os.getenv("RPC_MIN_INTERVAL_MS", "0"))

# ── Launch Thresholds ──────────────────────────────────────────
# Initial SOL deposited into the bonding curve, in whole SOL.
# Below the floor = wash-trade sized, above the cap = implausible.
MIN_INITIAL_SOL = float(os.getenv("MIN_INITIAL_SOL", "3"))
MAX_INITIAL_SOL = float(os.getenv("MAX_INITIAL_SOL", "50"))
# Minimum token amount (ui units) bought in the launch transaction
MIN_INITIAL_TOKEN = float(os.getenv("MIN_INITIAL_TOKEN", "1"))

# ── Fetch Workers ──────────────────────────────────────────────
# Outstanding getTransaction calls never exceed FETCH_WORKERS.
# Candidates arriving while the queue is full are dropped.
FETCH_WORKERS = int(os.getenv("FETCH_WORKERS", "8"))
FETCH_QUEUE_SIZE = int(os.getenv("FETCH_QUEUE_SIZE", "1000"))

# ── Output ─────────────────────────────────────────────────────
LAUNCH_JOURNAL_PATH = os.getenv("LAUNCH_JOURNAL_PATH", "launch_journal.jsonl")
STATS_INTERVAL_SECONDS = int(os.getenv("STATS_INTERVAL_SECONDS", "300"))

# ── Logging ────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
