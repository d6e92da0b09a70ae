"""
Tests for the sticky notes store.

Tests note creation, in-place updates, write-through persistence,
and tolerance of malformed stored data.
"""

import json

import pytest

from openhouse.models.note import Note
from openhouse.notes.store import NoteStore, NOTES_KEY
from openhouse.storage.json_file import JsonFileStorage, MemoryStorage


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def clock():
    """Deterministic millisecond clock: 1000, 1001, 1002, ..."""
    ticks = iter(range(1000, 2000))
    return lambda: next(ticks)


@pytest.fixture
def store(memory_storage, clock):
    return NoteStore(memory_storage, clock=clock)


def persisted(storage):
    """Decode the stored collection back into notes."""
    return [Note.from_dict(entry) for entry in json.loads(storage.get(NOTES_KEY))]


# =============================================================================
# Test Note Model
# =============================================================================

class TestNoteModel:
    """Tests for the Note dataclass."""
    
    def test_defaults_to_empty_draft(self):
        note = Note(id=1)
        assert note.text == ""
        assert note.saved is False
        assert note.is_draft
    
    def test_rejects_non_integer_id(self):
        with pytest.raises(ValueError, match="id must be an integer"):
            Note(id="abc")
    
    def test_rejects_boolean_id(self):
        with pytest.raises(ValueError):
            Note(id=True)
    
    def test_rejects_non_boolean_saved(self):
        with pytest.raises(ValueError, match="saved"):
            Note(id=1, saved="yes")
    
    def test_from_dict_ignores_unknown_keys(self):
        note = Note.from_dict({"id": 5, "text": "hi", "saved": True, "color": "yellow"})
        assert note == Note(id=5, text="hi", saved=True)


# =============================================================================
# Test Add / Update
# =============================================================================

class TestNoteStoreOperations:
    """Tests for add() and update()."""
    
    def test_starts_empty(self, store):
        assert store.notes == []
        assert len(store) == 0
    
    def test_add_appends_empty_draft(self, store):
        note = store.add()
        
        assert note == Note(id=1000, text="", saved=False)
        assert store.notes == [note]
    
    def test_add_keeps_creation_order(self, store):
        first = store.add()
        second = store.add()
        
        assert [n.id for n in store.notes] == [first.id, second.id]
    
    def test_update_merges_only_given_fields(self, store):
        note = store.add()
        store.update(note.id, text="hello")
        
        updated = store.get(note.id)
        assert updated.text == "hello"
        assert updated.saved is False
    
    def test_update_leaves_other_notes_untouched(self, store):
        first = store.add()
        second = store.add()
        
        store.update(first.id, text="changed", saved=True)
        
        assert store.get(second.id) == Note(id=second.id)
    
    def test_update_unknown_id_creates_nothing(self, store):
        store.add()
        
        result = store.update(99999, saved=True)
        
        assert result is None
        assert len(store) == 1
        assert store.get(99999) is None
    
    def test_update_rejects_unknown_field(self, store):
        note = store.add()
        with pytest.raises(ValueError, match="Unknown note fields"):
            store.update(note.id, color="blue")
    
    def test_save_sets_text_and_saved(self, store):
        note = store.add()
        
        saved = store.save(note.id, "Buy milk")
        
        assert saved.text == "Buy milk"
        assert saved.saved is True
    
    def test_edit_returns_note_to_draft(self, store):
        note = store.add()
        store.save(note.id, "Buy milk")
        
        edited = store.edit(note.id)
        
        assert edited.saved is False
        assert edited.text == "Buy milk"
    
    def test_notes_is_a_snapshot(self, store):
        store.add()
        snapshot = store.notes
        snapshot.clear()
        assert len(store) == 1


# =============================================================================
# Test Persistence
# =============================================================================

class TestNoteStorePersistence:
    """Tests for write-through and reload behavior."""
    
    def test_every_operation_round_trips(self, memory_storage, store):
        first = store.add()
        assert persisted(memory_storage) == store.notes
        
        second = store.add()
        assert persisted(memory_storage) == store.notes
        
        store.update(first.id, text="one")
        assert persisted(memory_storage) == store.notes
        
        store.save(second.id, "two")
        assert persisted(memory_storage) == store.notes
        
        store.update(424242, saved=True)
        assert persisted(memory_storage) == store.notes
        
        store.edit(second.id)
        assert persisted(memory_storage) == store.notes
    
    def test_new_store_loads_saved_notes(self, memory_storage, store):
        note = store.add()
        store.save(note.id, "persist me")
        
        reloaded = NoteStore(memory_storage)
        
        assert reloaded.notes == [Note(id=note.id, text="persist me", saved=True)]
    
    @pytest.mark.parametrize("raw", [
        "not json at all",
        '{"id": 1}',
        '[{"text": "missing id"}]',
        "[1, 2, 3]",
        '[{"id": "abc"}]',
        "null",
    ])
    def test_malformed_storage_loads_as_empty(self, raw):
        storage = MemoryStorage({NOTES_KEY: raw})
        
        store = NoteStore(storage)
        
        assert store.notes == []
    
    def test_malformed_storage_is_replaced_on_next_write(self):
        storage = MemoryStorage({NOTES_KEY: "{{{"})
        store = NoteStore(storage, clock=lambda: 5)
        
        store.add()
        
        assert json.loads(storage.get(NOTES_KEY)) == [{"id": 5, "text": "", "saved": False}]
    
    def test_file_storage_survives_restart(self, tmp_path):
        path = tmp_path / "storage.json"
        store = NoteStore(JsonFileStorage(path), clock=lambda: 1234)
        store.add()
        store.save(1234, "on disk")
        
        reloaded = NoteStore(JsonFileStorage(path))
        
        assert reloaded.notes == [Note(id=1234, text="on disk", saved=True)]
