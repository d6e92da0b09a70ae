"""
Local storage backends.

JsonFileStorage keeps every key in one JSON object on disk, the way a browser
keeps local storage per origin. MemoryStorage is the in-process variant for
tests and throwaway sessions.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from openhouse.config import LOCAL_STORAGE_PATH
from openhouse.storage.base import KeyValueStorage


class JsonFileStorage(KeyValueStorage):
    """
    File-backed key-value storage.
    
    The file holds a single JSON object mapping keys to string values.
    The whole file is re-read on every access, so several processes
    (CLI and web app) observe each other's writes.
    
    A missing, unreadable or malformed file behaves as an empty store.
    """
    
    def __init__(self, path: Path | str | None = None):
        """
        Initialize JsonFileStorage.
        
        Args:
            path: Backing file. Defaults to config.LOCAL_STORAGE_PATH.
        """
        self.path = Path(path) if path is not None else LOCAL_STORAGE_PATH
    
    @property
    def name(self) -> str:
        return "jsonfile"
    
    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            print(f"[{self.name}] Ignoring unreadable storage file {self.path}: {e}")
            return {}
        
        if not isinstance(data, dict):
            print(f"[{self.name}] Ignoring storage file {self.path}: not a JSON object")
            return {}
        
        return {str(k): v for k, v in data.items() if isinstance(v, str)}
    
    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
    
    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)
    
    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)
    
    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)
    
    def keys(self) -> List[str]:
        return list(self._load().keys())


class MemoryStorage(KeyValueStorage):
    """
    In-memory storage for testing and development.
    
    Data is stored in memory and lost when the process ends.
    """
    
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
    
    @property
    def name(self) -> str:
        return "memory"
    
    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)
    
    def set(self, key: str, value: str) -> None:
        self._data[key] = value
    
    def remove(self, key: str) -> None:
        self._data.pop(key, None)
    
    def keys(self) -> List[str]:
        return list(self._data.keys())
    
    def clear(self) -> None:
        """Clear all keys (for testing)."""
        self._data.clear()
