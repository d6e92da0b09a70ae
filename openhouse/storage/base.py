"""
Base storage abstraction for local client state.

Defines the key-value interface that local backends must implement,
mirroring a browser's local storage: string keys mapping to string values.
This allows swapping between a JSON file, an in-memory dict, etc.
"""

from abc import ABC, abstractmethod
import json
from typing import Any, List, Optional


class KeyValueStorage(ABC):
    """
    Abstract base class for all local storage backends.
    
    Implementations must provide methods for:
    - Reading a value by key
    - Writing a value by key (overwrites)
    - Removing a key
    - Listing keys
    
    Values are opaque strings; structured data goes through
    read_json()/write_json().
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this storage backend.
        
        Used for logging and debugging.
        """
        pass
    
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Return the value stored under key, or None if absent.
        """
        pass
    
    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store value under key, replacing any previous value.
        """
        pass
    
    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Remove key. Removing an absent key is a no-op.
        """
        pass
    
    @abstractmethod
    def keys(self) -> List[str]:
        pass
    
    def read_json(self, key: str, default: Any = None) -> Any:
        """
        Read and decode a JSON value.
        
        Absent or malformed content yields default; corruption is never
        surfaced to the caller.
        
        Args:
            key: Storage key.
            default: Value returned when the key is absent or unparsable.
            
        Returns:
            Decoded value or default.
        """
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return default
    
    def write_json(self, key: str, value: Any) -> None:
        """Encode value as JSON and store it under key."""
        self.set(key, json.dumps(value))
    
    def __str__(self) -> str:
        return f"Storage({self.name})"
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
