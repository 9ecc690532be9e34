"""
Initial liquidity of a Pump.fun launch, from balance snapshots.

The create instruction carries no amounts, so liquidity is derived by
differencing meta balances:
  - SOL:   post - pre lamports of the bonding curve account
  - token: post - pre ui amount of the new mint (pre usually absent)

Every gate that fails logs a warning with the signature and returns None.
"""
import logging
import math
from dataclasses import dataclass

import config
from pumpfun.constants import LAMPORTS_PER_SOL
from pumpfun.transaction import TokenBalance, TransactionRecord

logger = logging.getLogger("pump_liquidity")


@dataclass(frozen=True)
class InitialLiquidity:
    lamports: int
    sol: float
    token_amount: int
    token_balance: float
    decimals: int


def find_account_index(tx: TransactionRecord, account: str) -> int | None:
    """Position of `account` in the account key table (first match)."""
    for i, key in enumerate(tx.account_keys):
        if key == account:
            return i
    return None


def find_token_balance(balances, mint: str) -> TokenBalance | None:
    """First snapshot entry for `mint`, or None."""
    if not balances:
        return None
    for bal in balances:
        if bal.mint == mint:
            return bal
    return None


def compute_initial_liquidity(
    tx: TransactionRecord, mint: str, bonding_curve: str
) -> InitialLiquidity | None:
    sig = tx.signature
    meta = tx.meta
    if meta is None:
        logger.warning(f"[pump-reject] no meta sig={sig}")
        return None

    # ── SOL side: bonding curve lamport delta ───────────────
    pos = find_account_index(tx, bonding_curve)
    if pos is None:
        logger.warning(f"[pump-reject] bonding curve not in account keys sig={sig}")
        return None
    if pos >= len(meta.pre_balances) or pos >= len(meta.post_balances):
        logger.warning(
            f"[pump-reject] no SOL balance at index {pos} sig={sig}"
        )
        return None

    before_sol = meta.pre_balances[pos]
    after_sol = meta.post_balances[pos]
    if after_sol <= before_sol:
        logger.warning(
            f"[pump-reject] no SOL balance change sig={sig} "
            f"before={before_sol} after={after_sol}"
        )
        return None

    lamports = after_sol - before_sol
    sol = lamports / LAMPORTS_PER_SOL

    min_lamports = int(config.MIN_INITIAL_SOL * LAMPORTS_PER_SOL)
    max_lamports = int(config.MAX_INITIAL_SOL * LAMPORTS_PER_SOL)
    if lamports < min_lamports:
        logger.warning(
            f"[pump-reject] initial SOL {sol:.4f} < min {config.MIN_INITIAL_SOL} sig={sig}"
        )
        return None
    if lamports > max_lamports:
        logger.warning(
            f"[pump-reject] initial SOL {sol:.4f} > max {config.MAX_INITIAL_SOL} sig={sig}"
        )
        return None

    # ── Token side: mint ui amount delta ────────────────────
    # A brand-new mint has no pre balance; absence counts as zero
    pre = find_token_balance(meta.pre_token_balances, mint)
    before_token = pre.ui_amount if pre is not None and pre.ui_amount else 0.0

    post = find_token_balance(meta.post_token_balances, mint)
    if post is None or not post.ui_amount:
        logger.warning(f"[pump-reject] no post token balance sig={sig}")
        return None
    after_token = post.ui_amount

    if after_token <= before_token:
        logger.warning(
            f"[pump-reject] no token balance change sig={sig} "
            f"before={before_token} after={after_token}"
        )
        return None

    token_balance = after_token - before_token
    if token_balance < config.MIN_INITIAL_TOKEN:
        logger.warning(
            f"[pump-reject] initial tokens {token_balance} < min "
            f"{config.MIN_INITIAL_TOKEN} sig={sig}"
        )
        return None

    decimals = post.decimals
    if decimals is None:
        logger.warning(f"[pump-decimals] no token decimals, assuming 0 sig={sig}")
        decimals = 0

    return InitialLiquidity(
        lamports=lamports,
        sol=sol,
        token_amount=math.floor(token_balance * (10 ** decimals)),
        token_balance=token_balance,
        decimals=decimals,
    )
