"""
Pump.fun program IDs, log markers and the create instruction layout.
"""

# ═══════════════════════════════════════════════════════════════
#  PROGRAM IDS
# ═══════════════════════════════════════════════════════════════

# Pump.fun bonding-curve program (token launches)
PUMP_FUN = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"

LAMPORTS_PER_SOL = 1_000_000_000

# ═══════════════════════════════════════════════════════════════
#  LOG MARKERS
#
#  A launch with an initial buy logs both lines in one transaction.
#  Matched as whole log lines, never as substrings.
# ═══════════════════════════════════════════════════════════════

PUMP_CREATE_LOG = "Program log: IX: Create Metadata Accounts v3"
PUMP_BUY_LOG = "Program log: Instruction: Buy"

# ═══════════════════════════════════════════════════════════════
#  CREATE INSTRUCTION
#
#  Anchor discriminator: first 8 bytes of the instruction data.
#  Only the first 4 are compared (hex "181ec828").
# ═══════════════════════════════════════════════════════════════

CREATE_SELECTOR = "181ec828"
CREATE_SELECTOR_LENGTH = 4
CREATE_MIN_DATA_LENGTH = 8

# Account order of the create instruction (14 accounts):
#    0  mint                      7  user
#    1  mint_authority            8  system_program
#    2  bonding_curve             9  token_program
#    3  associated_bonding_curve 10  associated_token_program
#    4  global                   11  rent
#    5  mpl_token_metadata       12  event_authority
#    6  metadata                 13  program
CREATE_ACCOUNT_COUNT = 14
