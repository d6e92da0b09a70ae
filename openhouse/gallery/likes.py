"""
Liked-project mirror.

The server tracks upvotes per user; the client mirrors the ids it has liked
under the "likedProjects" storage key (a JSON array of project ids) so the
detail view can show the like state without asking the server.
"""

from typing import List

from openhouse.storage.base import KeyValueStorage

LIKED_PROJECTS_KEY = "likedProjects"


class LikedProjects:
    """Set of liked project ids backed by local storage."""
    
    def __init__(self, storage: KeyValueStorage, key: str = LIKED_PROJECTS_KEY):
        self.storage = storage
        self.key = key
    
    def ids(self) -> List[int]:
        """Liked ids in the order they were liked; malformed storage reads as empty."""
        raw = self.storage.read_json(self.key, default=[])
        if not isinstance(raw, list):
            return []
        return [value for value in raw if isinstance(value, int) and not isinstance(value, bool)]
    
    def contains(self, project_id: int) -> bool:
        return project_id in self.ids()
    
    def add(self, project_id: int) -> None:
        ids = self.ids()
        if project_id not in ids:
            ids.append(project_id)
        self.storage.write_json(self.key, ids)
    
    def discard(self, project_id: int) -> None:
        self.storage.write_json(self.key, [i for i in self.ids() if i != project_id])
