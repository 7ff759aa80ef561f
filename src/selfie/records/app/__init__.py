"""
Selfie Records Application Layer

This package exposes record resolution as an HTTP service using the aiohttp
framework.

Key Components:
- cli.py: Entry point for running the service, including logging setup
- server.py: Web server configuration and middleware setup
- config.py: Configuration management using Pydantic settings
- handlers/: Request handlers for the internal endpoints

The application uses a Sentry middleware for error reporting.

It provides the following endpoints:
- /internal/alive: Liveness probe
- /internal/api/records: Record resolution for one identifier
"""
