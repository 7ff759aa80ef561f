"""
Selfie Records - identity record resolution over DNS

This package resolves decentralized identity records published as DNS TXT
records. Given a domain (``example.com``) or an email-shaped identifier
(``alice@example.com``) and a set of record keys (``bitcoin-payment``, ``pgp``,
``nostr``, ``node-uri``), it derives one query name per key, looks up its TXT
records against a configurable nameserver and returns one outcome per key.

Key Components:
- resolve: Identifier validation, query name derivation, TXT lookups and
  batch resolution
- app: Configuration, logging setup and the HTTP service exposing resolution

Query names:
1. Domain identifiers resolve ``_<key>.<domain>``
2. Email-shaped identifiers resolve ``<local>.user._<key>.<domain>``

Every requested key gets exactly one outcome, either a value (all TXT strings
joined with a single space) or an error message. A failure for one key never
affects the others.
"""
