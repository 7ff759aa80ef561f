import logging
from typing import Optional

from aiohttp import web
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from selfie.records.app.config import (
    ResolverAppKey,
    Settings,
    SettingsAppKey,
    create_resolver,
)
from selfie.records.app.handlers.internal import (
    handle_internal_alive,
    handle_internal_records,
)

logger = logging.getLogger(__name__)


async def resolver_context(app):
    logger.info("Starting up")
    settings: Settings = app[SettingsAppKey]

    app[ResolverAppKey] = create_resolver(settings)

    logger.info(
        "Startup complete, nameserver %s, default records %s",
        settings.nameserver,
        ",".join(settings.default_records),
    )

    yield

    logger.info("Shutting down")


@web.middleware
async def sentry_middleware(request: web.Request, handler):
    try:
        response = await handler(request)
        return response
    except web.HTTPException:
        raise
    except Exception as e:
        sentry_sdk.capture_exception(e)
        raise e


async def start_web_server(settings: Optional[Settings] = None):

    if settings is None:
        settings = Settings()  # type: ignore
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            send_default_pii=True,
            integrations=[AioHttpIntegration()]
        )
    app = web.Application(middlewares=[sentry_middleware])

    app[SettingsAppKey] = settings

    app.add_routes(
        [
            web.get("/internal/alive", handle_internal_alive),
            web.get("/internal/api/records", handle_internal_records),
        ]
    )

    app.cleanup_ctx.append(resolver_context)

    return app
