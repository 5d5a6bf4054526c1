"""
Scribe Notes.

- backend/: REST API, database, configuration
- client/: Typed HTTP gateway and list/view-state synchronization
- cli/: Terminal front end (Typer + Rich)
"""

__version__ = "1.0.0"
