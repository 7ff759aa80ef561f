"""Identifier classification and TXT query name derivation.

Identifiers are either domain-shaped (``example.com``) or email-shaped
(``alice@example.com``). Each requested record key maps to its own DNS query
name, built from a different template for each shape.
"""

import re
from enum import IntEnum
from typing import Optional, Union

from pydantic import BaseModel

DOMAIN_PATTERN = re.compile(r"^(?!://)[a-zA-Z0-9_-]+(\.[a-zA-Z0-9_-]+)+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class IdentifierType(IntEnum):
    """Identifier shape enumeration.

    The shape is structural: an identifier with exactly one ``@`` is email-shaped.
    """

    domain = 1
    email = 2


class ParsedIdentifier(BaseModel):
    """Validated identifier with the query name derived for one record key."""

    identifier_type: IdentifierType
    identifier: str
    query_name: str


def classify_identifier(identifier: str) -> IdentifierType:
    if identifier.count("@") == 1:
        return IdentifierType.email
    return IdentifierType.domain


def validate_domain_or_subdomain(key: str, identifier: str) -> Optional[str]:
    """Check that identifier is two or more dot-separated labels and nothing else.

    Args:
        key: Record key the identifier is being validated for
        identifier: Identifier to check

    Returns:
        Error message naming the key, None if the identifier is domain-shaped
    """
    if DOMAIN_PATTERN.fullmatch(identifier) is None:
        return f"Invalid domain or subdomain name for key: {key}"
    return None


def validate_email_address(key: str, identifier: str) -> Optional[str]:
    """Check that identifier is ``local@domain`` with a dotted domain.

    Args:
        key: Record key the identifier is being validated for
        identifier: Identifier to check

    Returns:
        Error message naming the key, None if the identifier is email-shaped
    """
    if EMAIL_PATTERN.fullmatch(identifier) is None:
        return f"Invalid email name for key: {key}"
    return None


# Evaluated top-down. When every check fails the first error is reported, so
# the domain error takes priority over the email error.
VALIDATORS = (
    (IdentifierType.domain, validate_domain_or_subdomain),
    (IdentifierType.email, validate_email_address),
)


def validate_identifier(key: str, identifier: str) -> Optional[str]:
    """Validate identifier against both shapes.

    If both checks fail the domain error is returned. If only one fails, the
    error is returned only when it is the check for the identifier's own shape.

    Args:
        key: Record key the identifier is being validated for
        identifier: Identifier to check

    Returns:
        Error message, None if the identifier is valid for its shape
    """
    errors = [
        (identifier_type, validator(key, identifier))
        for identifier_type, validator in VALIDATORS
    ]
    failures = [(t, error) for t, error in errors if error is not None]
    if len(failures) == len(errors):
        return failures[0][1]

    identifier_type = classify_identifier(identifier)
    return next((error for t, error in failures if t == identifier_type), None)


def txt_record_name(identifier: str, key: str) -> str:
    """Derive the TXT query name for an identifier and record key.

    ``alice@example.com`` and ``pgp`` give ``alice.user._pgp.example.com``,
    ``example.com`` and ``pgp`` give ``_pgp.example.com``.
    """
    if classify_identifier(identifier) == IdentifierType.email:
        local, domain = identifier.split("@")
        return f"{local}.user._{key}.{domain}"
    return f"_{key}.{identifier}"


def parse_identifier(key: str, identifier: str) -> Union[ParsedIdentifier, str]:
    """Validate identifier for a record key and derive its query name.

    Args:
        key: Record key to derive the query name for
        identifier: Domain or email-shaped identifier

    Returns:
        ParsedIdentifier if valid, otherwise the validation error message
    """
    error = validate_identifier(key, identifier)
    if error is not None:
        return error
    return ParsedIdentifier(
        identifier_type=classify_identifier(identifier),
        identifier=identifier,
        query_name=txt_record_name(identifier, key),
    )
