"""TXT record lookups against a caller-chosen nameserver.

The lookup capability is modeled as a tagged result rather than an exception so
that resolution failures can be stored per record key as plain text.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Union

import sentry_sdk
from aiodns import DNSResolver
from aiodns.error import DNSError
from pydantic import BaseModel, model_validator

logger = logging.getLogger(__name__)


class TxtLookup(BaseModel):
    """Outcome of a single TXT lookup.

    Exactly one of ``records`` (possibly empty) or ``failure`` is set.
    """

    records: Optional[List[str]] = None
    failure: Optional[str] = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "TxtLookup":
        if (self.records is None) == (self.failure is None):
            raise ValueError("exactly one of records or failure must be set")
        return self

    @classmethod
    def found(cls, records: List[str]) -> "TxtLookup":
        return cls(records=records)

    @classmethod
    def failed(cls, failure: str) -> "TxtLookup":
        return cls(failure=failure)


class TxtClient(ABC):
    """Capability that resolves TXT records for a query name."""

    @abstractmethod
    async def lookup(self, query_name: str, nameserver: str) -> TxtLookup:
        """
        Resolve TXT records for query_name using the given nameserver.

        Implementations must not raise for resolution failures; they are
        returned as ``TxtLookup.failed``.

        Args:
            query_name: Fully derived DNS name to look up
            nameserver: IPv4 address of the nameserver to query
        """
        pass


def decode_txt(text: Union[str, bytes]) -> str:
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


class AiodnsTxtClient(TxtClient):
    """TXT client backed by aiodns (c-ares), plain UDP on port 53.

    A resolver channel is created per lookup and closed once it completes, so
    the nameserver is never shared state between concurrent calls.
    """

    def __init__(self, timeout: float = 5.0, tries: int = 1):
        self.timeout = timeout
        self.tries = tries

    async def lookup(self, query_name: str, nameserver: str) -> TxtLookup:
        resolver = DNSResolver(
            nameservers=[nameserver], timeout=self.timeout, tries=self.tries
        )
        try:
            results = await resolver.query(query_name, "TXT")
        except DNSError as e:
            return TxtLookup.failed(
                f"Error resolving TXT record for {query_name}: {e}"
            )
        except Exception as e:
            sentry_sdk.capture_exception(e)
            logger.exception("Unexpected error resolving %s", query_name)
            return TxtLookup.failed(
                f"Error resolving TXT record for {query_name}: {type(e).__name__}: {e}"
            )
        finally:
            await resolver.close()
        return TxtLookup.found([decode_txt(result.text) for result in results or []])
