"""
Notes CLI.

Terminal client built with Typer for working with notes through the
HTTP API.

Architecture:
- CLI is a thin presentation layer
- Note rules live in the backend
- CLI calls the backend via scribe.client (httpx)
- Sends X-Frontend-ID: cli header for log routing

Usage:
    scribe --help
    scribe notes list
    scribe health status
"""
