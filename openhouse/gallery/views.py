"""
Gallery views.

Each view owns its own state and talks to the API through an
OpenHouseClient. Identity always comes from the Session passed in.

- Gallery: the project grid with tag/department filters
- ProjectDetail: one project's comments, team and like state
- MyProjects: the signed-in user's uploads, with delete
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from openhouse.api.client import ApiError, OpenHouseClient
from openhouse.auth.session import Session
from openhouse.gallery.filters import (
    ProjectFilter,
    collect_vocabulary,
    filter_projects,
    order_projects,
)
from openhouse.gallery.likes import LikedProjects
from openhouse.models.note import now_ms
from openhouse.models.project import Comment, Project

# Comment dates are shown in India Standard Time (no DST)
IST = timezone(timedelta(hours=5, minutes=30), "IST")


def format_comment_date(created_at: str) -> str:
    """
    Format an ISO timestamp as e.g. "19 Oct 2026" in IST.
    
    Unparsable input is returned unchanged.
    """
    try:
        moment = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return created_at
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(IST).strftime("%d %b %Y")


class Gallery:
    """
    Project grid for a signed-in session.
    
    The project list is fetched once per session and shuffled once with the
    session seed; filters only narrow that fixed order.
    """
    
    def __init__(self, client: OpenHouseClient, session: Session):
        self.client = client
        self.session = session
        self.selection = ProjectFilter()
        self.tags: List[str] = []
        self.departments: List[str] = []
        self.error: Optional[str] = None
        self._projects: List[Project] = []
        self._loaded = False
    
    @property
    def loaded(self) -> bool:
        return self._loaded
    
    def load(self, force: bool = False) -> List[Project]:
        """
        Fetch projects and derive the tag and department vocabularies.
        
        A failed fetch leaves the gallery empty and records the error.
        
        Args:
            force: Re-fetch even if already loaded this session.
            
        Returns:
            All projects in session order.
        """
        self.session.require_user()
        if self._loaded and not force:
            return list(self._projects)
        
        try:
            projects = self.client.list_projects()
        except ApiError as e:
            print(f"[gallery] Failed to fetch projects: {e.message}")
            self.error = e.message
            projects = []
        else:
            self.error = None
        
        self._projects = order_projects(projects, self.session.seed)
        self.tags, self.departments = collect_vocabulary(projects)
        self._loaded = True
        return list(self._projects)
    
    def refresh(self) -> List[Project]:
        return self.load(force=True)
    
    def visible_projects(self) -> List[Project]:
        """Projects passing the current filter, in session order."""
        if not self._loaded:
            self.load()
        return filter_projects(self._projects, self.selection)
    
    def get(self, project_id: int) -> Optional[Project]:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None


class ProjectDetail:
    """
    Detail view for one project: comments, team lines and like toggle.
    
    Votes and comments are both sent under the user's display name.
    """
    
    def __init__(
        self,
        client: OpenHouseClient,
        session: Session,
        project: Project,
        likes: LikedProjects,
    ):
        self.client = client
        self.session = session
        self.project = project
        self.likes = likes
        self.comments: List[Comment] = []
        self.team_members: List[str] = []
        self.is_liked = False
    
    def load(self) -> None:
        """Fetch comments and team details, and read the mirrored like state."""
        try:
            self.comments = self.client.get_comments(self.project.id)
        except ApiError as e:
            print(f"[gallery] Failed to fetch comments: {e.message}")
        
        try:
            self.team_members = self.client.get_project(self.project.id).team_members
        except ApiError as e:
            print(f"[gallery] Failed to fetch team details: {e.message}")
        
        self.is_liked = self.likes.contains(self.project.id)
    
    def add_comment(self, text: str) -> bool:
        """
        Post a comment; on success it is prepended locally without re-fetching.
        
        Returns:
            True if the comment was accepted. Blank text is ignored.
        """
        if not text or not text.strip():
            return False
        user = self.session.require_user()
        
        try:
            self.client.add_comment(self.project.id, user.name, text)
        except ApiError as e:
            print(f"[gallery] Error adding comment: {e.message}")
            return False
        
        self.comments.insert(0, Comment(
            id=now_ms(),
            user_name=user.name,
            comment_text=text,
            created_at=datetime.now(timezone.utc).isoformat(),
        ))
        self.project.comments += 1
        return True
    
    def delete_comment(self, comment_id: int) -> bool:
        """Delete a comment, then re-fetch the comment list."""
        user = self.session.require_user()
        
        try:
            self.client.delete_comment(self.project.id, comment_id, user.name)
        except ApiError as e:
            print(f"[gallery] Error deleting comment: {e.message}")
            return False
        
        try:
            self.comments = self.client.get_comments(self.project.id)
        except ApiError as e:
            print(f"[gallery] Failed to refresh comments: {e.message}")
            self.comments = [c for c in self.comments if c.id != comment_id]
        self.project.comments = len(self.comments)
        return True
    
    def toggle_like(self) -> bool:
        """
        Upvote, or remove the upvote if already liked.
        
        Returns:
            True if the server accepted the change.
        """
        user = self.session.require_user()
        
        try:
            if self.is_liked:
                self.client.remove_vote(self.project.id, user.name)
            else:
                self.client.upvote(self.project.id, user.name)
        except ApiError as e:
            action = "removing like" if self.is_liked else "upvoting"
            print(f"[gallery] Error {action}: {e.message}")
            return False
        
        if self.is_liked:
            self.likes.discard(self.project.id)
            self.project.likes = max(0, self.project.likes - 1)
        else:
            self.likes.add(self.project.id)
            self.project.likes += 1
        self.is_liked = not self.is_liked
        return True


class MyProjects:
    """The signed-in user's own uploads."""
    
    def __init__(self, client: OpenHouseClient, session: Session):
        self.client = client
        self.session = session
        self.projects: List[Project] = []
    
    def load(self) -> List[Project]:
        user = self.session.require_user()
        try:
            self.projects = self.client.list_my_projects(user.user_name)
        except ApiError as e:
            print(f"[gallery] Failed to fetch projects for {user.user_name}: {e.message}")
            self.projects = []
        return list(self.projects)
    
    def delete(self, project_id: int) -> bool:
        """
        Delete one of the user's projects and drop it from the list.
        
        Returns:
            True if the server deleted it.
        """
        user = self.session.require_user()
        try:
            self.client.delete_project(project_id, user.user_name)
        except ApiError as e:
            print(f"[gallery] Error deleting project {project_id}: {e.message}")
            return False
        
        self.projects = [p for p in self.projects if p.id != project_id]
        return True
