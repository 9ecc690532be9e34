"""
Pump.fun launch event, the decoder's output.

One LaunchEvent per accepted create transaction. Frozen: it is handed
to the journal and never touched again.
"""
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class LaunchEvent:
    # ── Create instruction accounts ─────────────────────────
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

    # ── Initial liquidity ───────────────────────────────────
    initial_lamport_amount: int     # SOL added to the curve, lamports
    initial_token_amount: int       # tokens bought, raw units (× 10^decimals)
    initial_sol_balance: float      # same as lamports, in SOL
    initial_token_balance: float    # same as raw units, in ui units
    token_decimals: int

    def to_dict(self) -> dict:
        return asdict(self)
