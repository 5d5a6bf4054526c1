"""
CLI Commands.

Organized by feature area.
"""

from scribe.cli.commands.health import app as health_app
from scribe.cli.commands.notes import app as notes_app

__all__ = [
    "health_app",
    "notes_app",
]
