"""POST /api/push/register registers an Expo push token; DELETE removes it."""

import json

from starlette.responses import JSONResponse

from gateway.db import Database
from gateway.errors import bad_request, database_errors, handles_api_errors
from gateway.request import ExtractedRequest

EXPO_TOKEN_PREFIX = "ExponentPushToken["
EXPO_TOKEN_SUFFIX = "]"
TOPICS = ("all", "my_deputy")

UPSERT_TOKEN = """
    INSERT INTO push_tokens (expo_push_token, topic, deputy_acteur_ref, updated_at)
    VALUES (%s, %s, %s, now())
    ON CONFLICT (expo_push_token) DO UPDATE SET
        topic = EXCLUDED.topic,
        deputy_acteur_ref = EXCLUDED.deputy_acteur_ref,
        updated_at = EXCLUDED.updated_at
"""


def is_valid_expo_token(token: str) -> bool:
    return token.startswith(EXPO_TOKEN_PREFIX) and token.endswith(EXPO_TOKEN_SUFFIX)


async def read_body(request: ExtractedRequest) -> dict:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


@handles_api_errors
async def handle(request: ExtractedRequest, db: Database):
    body = await read_body(request)
    token = body.get("expo_push_token")
    token = token.strip() if isinstance(token, str) else ""
    if not is_valid_expo_token(token):
        raise bad_request("Invalid or missing expo_push_token (expected ExponentPushToken[...])")

    if request.method == "DELETE":
        with database_errors("Failed to unregister token"):
            await db.execute("DELETE FROM push_tokens WHERE expo_push_token = %s", (token,))
        return JSONResponse({"ok": True, "message": "Token unregistered"})

    topic = body.get("topic") if body.get("topic") in TOPICS else "all"
    deputy_ref = None
    if topic == "my_deputy" and isinstance(body.get("deputy_acteur_ref"), str):
        deputy_ref = body["deputy_acteur_ref"].strip() or None

    with database_errors("Failed to register token"):
        await db.execute(UPSERT_TOKEN, (token, topic, deputy_ref))
    return JSONResponse({"ok": True, "message": "Token registered"})
