"""
Notes module.

Sticky notes persisted to local storage.
"""

from openhouse.notes.store import NoteStore, NOTES_KEY

__all__ = [
    "NoteStore",
    "NOTES_KEY",
]
