"""DB helper for settlement_events: append-only history of order transitions.

Called from SettlementEngine within the settlement transaction, so an event
exists iff its transition committed.
"""
import json

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.enums import OrderKind, SettlementEventType

_INSERT_EVENT_SQL = text("""
    INSERT INTO settlement_events (event_type, digest, order_kind, actor, payload)
    VALUES (:event_type, :digest, :order_kind, :actor, :payload)
""")


async def write_settlement_event(
    event_type: SettlementEventType,
    digest: str,
    kind: OrderKind,
    actor: str,
    payload: dict[str, object],
    db: AsyncSession,
) -> None:
    """Insert one row into settlement_events within the caller's transaction."""
    await db.execute(
        _INSERT_EVENT_SQL,
        {
            "event_type": event_type.value,
            "digest": digest,
            "order_kind": kind.value,
            "actor": actor,
            "payload": json.dumps(payload),
        },
    )
