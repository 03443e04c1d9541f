"""GET|POST /api/cron/notify-scrutins

Reports the scrutins recorded in the last 24 hours and how many registered
devices would be notified. Push delivery itself happens elsewhere.
"""

from datetime import datetime, timedelta, timezone

from starlette.responses import JSONResponse

from gateway.db import Database
from gateway.errors import database_errors, handles_api_errors
from gateway.handlers.push_register import is_valid_expo_token
from gateway.request import ExtractedRequest

LOOKBACK = timedelta(hours=24)
MAX_SCRUTINS = 500


def notification_title(count: int) -> str:
    return "1 nouveau scrutin" if count == 1 else f"{count} nouveaux scrutins"


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    since = (datetime.now(timezone.utc) - LOOKBACK).replace(minute=0, second=0, microsecond=0)

    with database_errors("Failed to fetch scrutins"):
        scrutins = await db.fetch_all(
            "SELECT id FROM scrutins WHERE created_at >= %s ORDER BY created_at DESC LIMIT %s",
            (since, MAX_SCRUTINS),
        )
    if not scrutins:
        return JSONResponse({"ok": True, "message": "No new scrutins", "sent": 0})

    with database_errors("Failed to fetch push tokens"):
        rows = await db.fetch_all("SELECT expo_push_token FROM push_tokens WHERE topic = 'all'")
    tokens = [r["expo_push_token"] for r in rows if is_valid_expo_token(r["expo_push_token"] or "")]
    if not tokens:
        return JSONResponse({"ok": True, "message": "No tokens to notify", "sent": 0})

    return JSONResponse(
        {
            "ok": True,
            "message": notification_title(len(scrutins)),
            "scrutin_id": str(scrutins[0]["id"]),
            "sent": 0,
            "tokens": len(tokens),
        }
    )
