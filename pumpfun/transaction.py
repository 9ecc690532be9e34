"""
Typed view of a getTransaction result (encoding="json").

Only the fields the launch decoder reads are kept:
  - compiled instructions (program index, raw data, account indexes)
  - the full account key table (static keys + loaded addresses)
  - SOL and SPL token balance snapshots from meta

Records are built once per fetched transaction and never mutated.
"""
from dataclasses import dataclass

import base58


@dataclass(frozen=True)
class Instruction:
    program_id_index: int
    data: bytes
    accounts: tuple[int, ...]

    @classmethod
    def from_rpc(cls, ix: dict) -> "Instruction":
        return cls(
            program_id_index=int(ix["programIdIndex"]),
            data=base58.b58decode(ix.get("data", "")),
            accounts=tuple(int(i) for i in ix.get("accounts", [])),
        )


@dataclass(frozen=True)
class TokenBalance:
    account_index: int
    mint: str
    ui_amount: float | None
    decimals: int | None

    @classmethod
    def from_rpc(cls, bal: dict) -> "TokenBalance":
        ui = bal.get("uiTokenAmount") or {}
        ui_amount = ui.get("uiAmount")
        decimals = ui.get("decimals")
        return cls(
            account_index=int(bal.get("accountIndex", -1)),
            mint=bal.get("mint", ""),
            ui_amount=float(ui_amount) if ui_amount is not None else None,
            decimals=int(decimals) if decimals is not None else None,
        )


def _pubkey(key) -> str:
    # jsonParsed encoding wraps keys as {"pubkey": ..., "signer": ...}
    return key.get("pubkey", "") if isinstance(key, dict) else str(key)


def _token_balances(raw) -> tuple[TokenBalance, ...] | None:
    # None (field missing) is kept apart from an empty list
    if raw is None:
        return None
    return tuple(TokenBalance.from_rpc(b) for b in raw)


@dataclass(frozen=True)
class TransactionMeta:
    err: object = None
    pre_balances: tuple[int, ...] = ()
    post_balances: tuple[int, ...] = ()
    pre_token_balances: tuple[TokenBalance, ...] | None = None
    post_token_balances: tuple[TokenBalance, ...] | None = None

    @classmethod
    def from_rpc(cls, meta: dict) -> "TransactionMeta":
        return cls(
            err=meta.get("err"),
            pre_balances=tuple(int(b) for b in meta.get("preBalances", [])),
            post_balances=tuple(int(b) for b in meta.get("postBalances", [])),
            pre_token_balances=_token_balances(meta.get("preTokenBalances")),
            post_token_balances=_token_balances(meta.get("postTokenBalances")),
        )


@dataclass(frozen=True)
class TransactionRecord:
    """
    One fetched transaction.

    account_keys is the table that instruction account indexes and the
    balance arrays refer to: static message keys first, then addresses
    loaded from lookup tables (writable, then readonly).
    """

    signatures: tuple[str, ...]
    instructions: tuple[Instruction, ...] = ()
    account_keys: tuple[str, ...] = ()
    meta: TransactionMeta | None = None
    slot: int | None = None
    block_time: int | None = None

    @property
    def signature(self) -> str:
        return self.signatures[0]

    @classmethod
    def from_rpc(cls, result: dict) -> "TransactionRecord":
        """Build a record from the `result` object of getTransaction."""
        tx = result["transaction"]
        message = tx["message"]
        signatures = tuple(tx.get("signatures", []))
        if not signatures:
            raise ValueError("transaction has no signatures")

        keys = [_pubkey(k) for k in message.get("accountKeys", [])]
        raw_meta = result.get("meta")
        meta = None
        if raw_meta is not None:
            loaded = raw_meta.get("loadedAddresses") or {}
            keys.extend(loaded.get("writable", []))
            keys.extend(loaded.get("readonly", []))
            meta = TransactionMeta.from_rpc(raw_meta)

        return cls(
            signatures=signatures,
            instructions=tuple(
                Instruction.from_rpc(ix) for ix in message.get("instructions", [])
            ),
            account_keys=tuple(keys),
            meta=meta,
            slot=result.get("slot"),
            block_time=result.get("blockTime"),
        )
