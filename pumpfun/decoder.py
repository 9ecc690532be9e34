"""
Pump.fun create instruction decoder.

A launch transaction bundles ~15 instructions (system createAccount,
initializeMint2, ATA create, Metaplex createMetadataAccountV3, mintTo,
setAuthority, the initial buy, ...). Flow:
  1. Find the Pump.fun create instruction by its 4-byte selector
  2. Map its 14 account indexes to named roles (fixed order)
  3. Derive initial SOL / token liquidity from balance deltas
  4. Assemble a LaunchEvent, or None if any step rejected
"""
import logging
from dataclasses import dataclass, fields

from pumpfun.constants import (
    CREATE_ACCOUNT_COUNT,
    CREATE_MIN_DATA_LENGTH,
    CREATE_SELECTOR,
    CREATE_SELECTOR_LENGTH,
)
from pumpfun.event import LaunchEvent
from pumpfun.liquidity import compute_initial_liquidity
from pumpfun.transaction import TransactionRecord

logger = logging.getLogger("pump_decoder")


def is_create_instruction(ix) -> bool:
    # Index 0 is the fee payer, never an invoked program
    if ix.program_id_index <= 0:
        return False
    if len(ix.data) < CREATE_MIN_DATA_LENGTH:
        return False
    return ix.data[:CREATE_SELECTOR_LENGTH].hex() == CREATE_SELECTOR


def locate_create_instruction(tx: TransactionRecord) -> int | None:
    """Index of the first create instruction in the transaction, or None."""
    for i, ix in enumerate(tx.instructions):
        if is_create_instruction(ix):
            return i
    return None


@dataclass(frozen=True)
class CreateAccounts:
    """
    Named accounts of the create instruction.

    Field order IS the on-chain account order. A different account count
    means a different instruction layout, so it is rejected, not padded.
    """

    mint: str
    mint_authority: str
    bonding_curve: str
    associated_bonding_curve: str
    global_account: str
    mpl_token_metadata: str
    metadata: str
    user: str
    system_program: str
    token_program: str
    associated_token_program: str
    rent: str
    event_authority: str
    program: str

    @classmethod
    def from_keys(cls, keys) -> "CreateAccounts | None":
        if len(keys) != CREATE_ACCOUNT_COUNT:
            return None
        return cls(*keys)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def resolve_create_accounts(
    tx: TransactionRecord, index: int
) -> CreateAccounts | None:
    sig = tx.signature
    if tx.meta is None:
        logger.warning(f"[pump-reject] transaction has no meta sig={sig}")
        return None
    if tx.meta.post_token_balances is None:
        logger.warning(f"[pump-reject] transaction has no post token balances sig={sig}")
        return None

    indexes = tx.instructions[index].accounts
    if any(i < 0 or i >= len(tx.account_keys) for i in indexes):
        logger.warning(f"[pump-reject] account index out of range sig={sig}")
        return None

    accounts = CreateAccounts.from_keys([tx.account_keys[i] for i in indexes])
    if accounts is None:
        logger.warning(
            f"[pump-reject] create has {len(indexes)} accounts, "
            f"expected {CREATE_ACCOUNT_COUNT} sig={sig}"
        )
    return accounts


def parse_launch_event(tx: TransactionRecord) -> LaunchEvent | None:
    """Decode a launch transaction into a LaunchEvent, or None."""
    index = locate_create_instruction(tx)
    if index is None:
        logger.debug(f"[pump-skip] no create instruction sig={tx.signature}")
        return None

    accounts = resolve_create_accounts(tx, index)
    if accounts is None:
        return None

    liquidity = compute_initial_liquidity(tx, accounts.mint, accounts.bonding_curve)
    if liquidity is None:
        return None

    return LaunchEvent(
        **accounts.to_dict(),
        initial_lamport_amount=liquidity.lamports,
        initial_token_amount=liquidity.token_amount,
        initial_sol_balance=liquidity.sol,
        initial_token_balance=liquidity.token_balance,
        token_decimals=liquidity.decimals,
    )
