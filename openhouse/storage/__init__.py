"""
Storage module.

Local key-value persistence for notes, liked projects and the session cookie.
"""

from openhouse.storage.base import KeyValueStorage
from openhouse.storage.json_file import JsonFileStorage, MemoryStorage

__all__ = [
    "KeyValueStorage",
    "JsonFileStorage",
    "MemoryStorage",
]
