"""
Sticky notes store.

Keeps the note collection in memory and writes the whole collection through
to local storage after every change. On start-up the collection is read back;
anything missing or malformed is treated as an empty collection.
"""

from typing import Callable, List, Optional

from openhouse.models.note import Note, now_ms
from openhouse.storage.base import KeyValueStorage

NOTES_KEY = "notes"


class NoteStore:
    """
    Note collection mirrored to a KeyValueStorage key.
    
    There is no delete operation: notes live until the storage key is
    cleared externally.
    """
    
    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = NOTES_KEY,
        clock: Callable[[], int] = now_ms,
    ):
        """
        Initialize NoteStore and load any persisted notes.
        
        Args:
            storage: Backend holding the serialized collection.
            key: Storage key for the collection.
            clock: Source of new note ids (milliseconds).
        """
        self.storage = storage
        self.key = key
        self._clock = clock
        self._notes: List[Note] = self._load()
    
    @property
    def notes(self) -> List[Note]:
        """Snapshot of the collection in creation order."""
        return list(self._notes)
    
    def _load(self) -> List[Note]:
        raw = self.storage.read_json(self.key, default=[])
        if not isinstance(raw, list):
            print(f"[notes] Ignoring stored {self.key!r}: not a list")
            return []
        
        try:
            return [Note.from_dict(entry) for entry in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            print(f"[notes] Ignoring malformed notes: {e}")
            return []
    
    def _persist(self) -> None:
        self.storage.write_json(self.key, [note.to_dict() for note in self._notes])
    
    def get(self, note_id: int) -> Optional[Note]:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None
    
    def add(self) -> Note:
        """
        Append a new empty draft note.
        
        Returns:
            The created note.
        """
        note = Note(id=self._clock())
        self._notes.append(note)
        self._persist()
        return note
    
    def update(self, note_id: int, **fields) -> Optional[Note]:
        """
        Merge fields into the note with the given id.
        
        Other notes are left untouched. An unknown id changes nothing and
        creates nothing (the collection is still written through).
        
        Args:
            note_id: Id of the note to change.
            **fields: Any of text, saved.
            
        Returns:
            The updated note, or None if no note matched.
            
        Raises:
            ValueError: If a field name is unknown or a value has the wrong type.
        """
        unknown = set(fields) - {"text", "saved"}
        if unknown:
            raise ValueError(f"Unknown note fields: {', '.join(sorted(unknown))}")
        
        updated = None
        merged: List[Note] = []
        for note in self._notes:
            if note.id == note_id:
                note = Note.from_dict({**note.to_dict(), **fields})
                updated = note
            merged.append(note)
        
        self._notes = merged
        self._persist()
        return updated
    
    def save(self, note_id: int, text: str) -> Optional[Note]:
        """Store text and leave draft mode."""
        return self.update(note_id, text=text, saved=True)
    
    def edit(self, note_id: int) -> Optional[Note]:
        """Return a saved note to draft mode."""
        return self.update(note_id, saved=False)
    
    def __len__(self) -> int:
        return len(self._notes)
