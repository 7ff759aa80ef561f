"""Batch resolution of identity records.

Resolves a set of record keys for one identifier. Each key is validated, mapped
to its TXT query name and looked up independently, so one key's failure never
affects another key's outcome.
"""

import asyncio
import ipaddress
import logging
from typing import Dict, Iterable, List, Optional

import sentry_sdk
from pydantic import BaseModel, model_validator

from selfie.records.resolve.identifier import parse_identifier
from selfie.records.resolve.txt import AiodnsTxtClient, TxtClient

logger = logging.getLogger(__name__)

DEFAULT_RECORDS: List[str] = ["bitcoin-payment", "pgp", "nostr", "node-uri"]
DEFAULT_NAMESERVER = "8.8.8.8"
MAX_CONCURRENCY = 8

NO_RECORDS_ERROR = "No TXT records found"
CANCELED_ERROR = "canceled"


class ResolutionOutcome(BaseModel):
    """Per-key result: either a resolved value or an error, never both."""

    value: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "ResolutionOutcome":
        if (self.value is None) == (self.error is None):
            raise ValueError("exactly one of value or error must be set")
        return self

    @classmethod
    def resolved(cls, value: str) -> "ResolutionOutcome":
        return cls(value=value)

    @classmethod
    def failed(cls, error: str) -> "ResolutionOutcome":
        return cls(error=error)


BatchResult = Dict[str, ResolutionOutcome]


def parse_nameserver(nameserver: Optional[str]) -> Optional[str]:
    """Return the nameserver in dotted-decimal form, None if it is not IPv4."""
    if nameserver is None:
        return None
    try:
        return str(ipaddress.IPv4Address(nameserver.strip()))
    except ValueError:
        return None


class RecordsResolver:
    """Resolves identity records for domain and email-shaped identifiers.

    The configured nameserver is fixed for the lifetime of the instance. A
    per-call nameserver override is passed down to each lookup instead of
    replacing the configuration, so concurrent calls never observe each
    other's override.
    """

    def __init__(
        self,
        debug: bool = False,
        nameserver: str = DEFAULT_NAMESERVER,
        client: Optional[TxtClient] = None,
        max_concurrency: int = MAX_CONCURRENCY,
        lookup_timeout: float = 5.0,
    ):
        """
        Args:
            debug: Log every lookup at debug level, otherwise only errors
            nameserver: IPv4 address of the default nameserver
            client: TXT lookup capability, aiodns-backed by default
            max_concurrency: Upper bound on parallel lookups in one call
            lookup_timeout: Per-lookup timeout in seconds for the default client

        Raises:
            ValueError: If nameserver is not an IPv4 address
        """
        parsed = parse_nameserver(nameserver)
        if parsed is None:
            raise ValueError(f"nameserver must be an IPv4 address: {nameserver!r}")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        logging.getLogger("selfie.records.resolve").setLevel(
            logging.DEBUG if debug else logging.ERROR
        )

        self.debug = debug
        self.nameserver = parsed
        self.max_concurrency = max_concurrency
        self.client = client if client is not None else AiodnsTxtClient(lookup_timeout)

    async def resolve_key(
        self, identifier: str, key: str, nameserver: str
    ) -> ResolutionOutcome:
        """Resolve one record key for an identifier.

        Validation errors are returned without performing a lookup.
        """
        parsed = parse_identifier(key, identifier)
        if isinstance(parsed, str):
            return ResolutionOutcome.failed(parsed)

        logger.debug("Resolving TXT record for: %s", parsed.query_name)
        lookup = await self.client.lookup(parsed.query_name, nameserver)

        if lookup.failure is not None:
            logger.error("Error processing %s: %s", key, lookup.failure)
            return ResolutionOutcome.failed(lookup.failure)
        if len(lookup.records) == 0:
            return ResolutionOutcome.failed(NO_RECORDS_ERROR)
        return ResolutionOutcome.resolved(" ".join(lookup.records))

    async def resolve(
        self,
        identifier: str,
        keys: Optional[Iterable[str]] = None,
        nameserver: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> BatchResult:
        """Resolve a set of record keys for one identifier.

        Args:
            identifier: Domain (``example.com``) or email-shaped
                (``alice@example.com``) identifier
            keys: Record keys to resolve, defaults to DEFAULT_RECORDS
            nameserver: IPv4 nameserver used for this call only. Values that
                are not IPv4 addresses are ignored.
            timeout: Overall deadline in seconds. Keys still unresolved when it
                expires get a "canceled" error.

        Returns:
            One ResolutionOutcome per distinct requested key
        """
        requested = list(dict.fromkeys(DEFAULT_RECORDS if keys is None else keys))
        if len(requested) == 0:
            return {}

        call_nameserver = parse_nameserver(nameserver)
        if call_nameserver is None:
            if nameserver is not None:
                logger.debug("Ignoring invalid nameserver override %r", nameserver)
            call_nameserver = self.nameserver

        semaphore = asyncio.Semaphore(min(len(requested), self.max_concurrency))

        async def bounded(key: str) -> ResolutionOutcome:
            async with semaphore:
                return await self.resolve_key(identifier, key, call_nameserver)

        tasks = {key: asyncio.create_task(bounded(key)) for key in requested}
        try:
            _, pending = await asyncio.wait(tasks.values(), timeout=timeout)
        except asyncio.CancelledError:
            for task in tasks.values():
                task.cancel()
            raise

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        results: BatchResult = {}
        for key, task in tasks.items():
            if task.cancelled():
                results[key] = ResolutionOutcome.failed(CANCELED_ERROR)
            elif task.exception() is not None:
                error = task.exception()
                sentry_sdk.capture_exception(error)
                logger.error("Error processing %s: %s", key, error)
                results[key] = ResolutionOutcome.failed(
                    f"{type(error).__name__}: {error}"
                )
            else:
                results[key] = task.result()
        return results

    async def get_records(
        self,
        identifier: str,
        keys: Optional[Iterable[str]] = None,
        nameserver: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Dict[str, Optional[str]]]:
        """Same as resolve, with outcomes as plain ``{"value", "error"}`` dicts."""
        results = await self.resolve(identifier, keys, nameserver, timeout)
        return {key: outcome.model_dump() for key, outcome in results.items()}
