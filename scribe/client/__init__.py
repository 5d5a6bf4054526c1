"""
Notes client.

- gateway: typed HTTP client for the notes API
- normalize: raw JSON → ClientNote boundary
- view_state: list synchronization and optimistic progress updates
"""

from scribe.client.gateway import NotesClient, RequestFailed
from scribe.client.normalize import ClientNote, normalize, sort_notes
from scribe.client.view_state import Notification, NotesView, ProgressTracker

__all__ = [
    "ClientNote",
    "Notification",
    "NotesClient",
    "NotesView",
    "ProgressTracker",
    "RequestFailed",
    "normalize",
    "sort_notes",
]
