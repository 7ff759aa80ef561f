import json
import logging
from aiohttp import web
from selfie.records.app.config import ResolverAppKey, SettingsAppKey

logger = logging.getLogger(__name__)


async def handle_internal_alive(request: web.Request):
    return web.Response(status=200)


async def handle_internal_records(request: web.Request):
    identifier = request.query.get("identifier", "").strip()
    if len(identifier) == 0:
        raise web.HTTPBadRequest(
            body=json.dumps({"error": "Missing identifier"}),
            content_type="application/json",
        )

    settings = request.app[SettingsAppKey]
    resolver = request.app[ResolverAppKey]

    keys = request.query.getall("key", []) or settings.default_records
    nameserver = request.query.get("nameserver", None)

    records = await resolver.get_records(
        identifier, keys, nameserver, settings.batch_timeout
    )
    return web.json_response(records)
