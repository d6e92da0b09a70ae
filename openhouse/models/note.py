"""
Sticky note data model.

A note is identified by its creation timestamp (milliseconds since the epoch)
and is either a draft being edited (saved=False) or a saved note.
"""

from dataclasses import dataclass, asdict
import time


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


@dataclass
class Note:
    """
    A single sticky note.
    
    Attributes:
        id: Creation timestamp in milliseconds; unique within a store.
        text: Note body.
        saved: False while the note is an editable draft.
    """
    
    id: int
    text: str = ""
    saved: bool = False
    
    def __post_init__(self) -> None:
        self.validate()
    
    def validate(self) -> None:
        """
        Raises:
            ValueError: If a field has the wrong type.
        """
        errors = []
        
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            errors.append(f"id must be an integer, got {self.id!r}")
        if not isinstance(self.text, str):
            errors.append(f"text must be a string, got {type(self.text).__name__}")
        if not isinstance(self.saved, bool):
            errors.append(f"saved must be a boolean, got {self.saved!r}")
        
        if errors:
            raise ValueError(f"Note validation failed: {'; '.join(errors)}")
    
    @property
    def is_draft(self) -> bool:
        return not self.saved
    
    def to_dict(self) -> dict:
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: dict) -> "Note":
        """Build a Note from its stored form; unknown keys are ignored."""
        return cls(
            id=data["id"],
            text=data.get("text", ""),
            saved=data.get("saved", False),
        )
    
    def __str__(self) -> str:
        state = "saved" if self.saved else "draft"
        return f"[{self.id}] ({state}) {self.text}"
