"""
Log pre-filter for Pump.fun logsNotification messages.

Fetching a transaction costs an RPC round-trip, so only notifications
whose logs show a create AND a buy in the same transaction go through.
"""
from dataclasses import dataclass, field

from pumpfun.constants import PUMP_BUY_LOG, PUMP_CREATE_LOG


@dataclass(frozen=True)
class LogNotification:
    signature: str
    logs: tuple[str, ...] = field(default_factory=tuple)
    err: object = None

    @classmethod
    def from_message(cls, data) -> "LogNotification | None":
        """Extract the notification from a raw websocket message."""
        if not isinstance(data, dict) or data.get("method") != "logsNotification":
            return None
        value = data.get("params")
        for key in ("result", "value"):
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        if not isinstance(value, dict):
            return None
        signature = value.get("signature")
        if not signature:
            return None
        return cls(
            signature=signature,
            logs=tuple(value.get("logs") or ()),
            err=value.get("err"),
        )


def is_launch_candidate(notification: LogNotification) -> str | None:
    """Signature of a create+buy transaction, or None."""
    # Failed transactions log the same lines up to the failing instruction
    if notification.err is not None:
        return None
    if PUMP_CREATE_LOG not in notification.logs:
        return None
    if PUMP_BUY_LOG not in notification.logs:
        return None
    return notification.signature
