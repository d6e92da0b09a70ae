"""
Data models module.

Contains core data structures: Note, Project, Comment, User.
"""

from openhouse.models.note import Note, now_ms
from openhouse.models.project import Project, Comment, split_tags, split_team_details
from openhouse.models.user import User

__all__ = [
    "Note",
    "now_ms",
    "Project",
    "Comment",
    "split_tags",
    "split_team_details",
    "User",
]
