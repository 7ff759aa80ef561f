"""
Configuration Module for the Selfie Records service

This module defines the configuration system for record resolution, using
Pydantic for settings validation and dependency injection through AppKeys.

The Settings class is loaded from environment variables with defaults suitable
for development. Application components access settings and the shared
resolver through typed AppKeys.

Key configuration areas include:
- Environment and debugging
- Nameserver and lookup behavior
- Network and monitoring
"""

import ipaddress
import logging
from typing import Annotated, Final, List, Optional

from aiohttp import web
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from selfie.records.resolve.batch import (
    DEFAULT_NAMESERVER,
    DEFAULT_RECORDS,
    MAX_CONCURRENCY,
    RecordsResolver,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings for the Selfie Records service.

    Environment variables are mapped to settings fields automatically, for
    example NAMESERVER sets ``nameserver`` and DEFAULT_RECORDS sets
    ``default_records``.
    """

    debug: bool = False
    """
    Enable debug mode for verbose logging.
    Set with DEBUG=true environment variable.
    """

    nameserver: str = DEFAULT_NAMESERVER
    """
    IPv4 address of the nameserver used when a request has no override.
    Set with NAMESERVER environment variable.
    Default: 8.8.8.8
    """

    lookup_timeout: float = 5.0
    """
    Timeout in seconds for a single TXT lookup.
    Set with LOOKUP_TIMEOUT environment variable.
    """

    batch_timeout: Optional[float] = None
    """
    Overall deadline in seconds for resolving all keys of one request.
    Keys unresolved when it expires are reported as canceled.
    Set with BATCH_TIMEOUT environment variable. No deadline if not set.
    """

    max_concurrency: int = Field(default=MAX_CONCURRENCY, ge=1)
    """
    Maximum number of lookups issued in parallel for one request.
    Set with MAX_CONCURRENCY environment variable.
    """

    default_records: Annotated[List[str], NoDecode] = list(DEFAULT_RECORDS)
    """
    Record keys resolved when a request names none.
    Set with DEFAULT_RECORDS environment variable as comma-separated values.
    """

    http_port: int = Field(alias="port", default=5100)
    """
    HTTP port for the service to listen on.
    Set with PORT environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    @field_validator("nameserver", mode="before")
    @classmethod
    def validate_nameserver(cls, v) -> str:
        """
        Validate the nameserver setting.

        Raises:
            ValueError: If the value is not an IPv4 address
        """
        try:
            return str(ipaddress.IPv4Address(str(v).strip()))
        except ValueError:
            raise ValueError("nameserver must be an IPv4 address")

    @field_validator("default_records", mode="before")
    @classmethod
    def decode_default_records(cls, v) -> List[str]:
        """
        Accept either a list of keys or a comma-separated string.
        """
        if isinstance(v, str):
            return [key.strip() for key in v.split(",") if key.strip()]
        return v


def create_resolver(settings: Settings) -> RecordsResolver:
    return RecordsResolver(
        debug=settings.debug,
        nameserver=settings.nameserver,
        max_concurrency=settings.max_concurrency,
        lookup_timeout=settings.lookup_timeout,
    )


# Application context keys for dependency injection
SettingsAppKey: Final = web.AppKey("settings", Settings)
"""AppKey for accessing the application settings"""

ResolverAppKey: Final = web.AppKey("resolver", RecordsResolver)
"""AppKey for accessing the shared records resolver"""
