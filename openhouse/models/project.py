"""
Project showcase data models.

Projects are owned by the remote API and never persisted client-side.
Project.from_api() normalizes a raw API record into the view used by the
gallery, the detail view and the my-projects list.

Raw API record (fields used):
{
    "id": 42,
    "title": "Smart Irrigation",
    "abstract": "...",
    "tags": "iot, agriculture",          # comma-separated
    "domain": "IoT",
    "department": "ECE",
    "cover_poster": "cover.png",        # file names under /uploads
    "result": "result.png",
    "methodology": "method.png",
    "pdf_poster": "poster.pdf",
    "drive_link": "https://...",
    "team_details": "Alice\\nBob",
    "mentor_name": "Dr. X",
    "is_software": "true",
    "startup_potential": "yes",
    "user_name": "alice",
    "aggr_upvote_count": 3,             # gallery list
    "agggr_comment_count": 1,           # gallery list (sic)
    "votes_count": 3,                   # my-projects list
    "comments_count": 1                 # my-projects list
}
"""

from dataclasses import dataclass, field
from typing import List, Optional

PLACEHOLDER_THUMBNAIL = "https://via.placeholder.com/500x300?text=No+Cover"
PLACEHOLDER_COVER = "https://via.placeholder.com/800x500?text=No+Cover"
PLACEHOLDER_RESULT = "https://via.placeholder.com/800x500?text=No+Result"
PLACEHOLDER_METHODOLOGY = "https://via.placeholder.com/800x500?text=No+Methodology"

DEFAULT_DEPARTMENT = "General"


def split_tags(raw: Optional[str]) -> List[str]:
    """Split a comma-separated tag string into trimmed, non-empty tags."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def split_team_details(raw: Optional[str]) -> List[str]:
    """Split free-form team details into trimmed, non-empty lines."""
    if not raw:
        return []
    return [line.strip() for line in raw.splitlines() if line.strip()]


def _first_count(record: dict, *keys: str) -> int:
    for key in keys:
        value = record.get(key)
        if value:
            try:
                return int(value)
            except (TypeError, ValueError):
                continue
    return 0


@dataclass
class Project:
    """
    A student project as displayed by the client.
    
    Attributes:
        id: Server-assigned identifier.
        title: Project title.
        abstract: Project abstract.
        tags: Keyword tags.
        department: Owning department ("General" when unset).
        domain: Technical domain; also the single tech_stack entry.
        thumbnail: Cover image URL used in the grid.
        images: Cover, result and methodology image URLs.
        demo_url: Drive link, or "#" when absent.
        likes: Upvote count.
        comments: Comment count.
        team: Raw team details text.
        mentor: Faculty mentor name.
        is_software: True for software-only projects.
        startup_potential: "yes", "no", "maybe" or "".
        uploaded_by: Handle of the uploader.
        pdf_poster: PDF poster URL, if uploaded.
    """
    
    id: int
    title: str
    abstract: str = ""
    tags: List[str] = field(default_factory=list)
    department: str = DEFAULT_DEPARTMENT
    domain: str = ""
    thumbnail: str = PLACEHOLDER_THUMBNAIL
    images: List[str] = field(default_factory=list)
    demo_url: str = "#"
    likes: int = 0
    comments: int = 0
    team: str = ""
    mentor: str = ""
    is_software: bool = False
    startup_potential: str = ""
    uploaded_by: str = ""
    pdf_poster: Optional[str] = None
    
    @property
    def tech_stack(self) -> List[str]:
        return [self.domain] if self.domain else []
    
    @property
    def team_members(self) -> List[str]:
        return split_team_details(self.team)
    
    @classmethod
    def from_api(cls, record: dict, api_url: str) -> "Project":
        """
        Normalize a raw API record.
        
        Args:
            record: Project record as returned by the API.
            api_url: API base URL used to resolve uploaded file names.
            
        Returns:
            New Project instance.
            
        Raises:
            ValueError: If the record has no usable id.
        """
        if not isinstance(record, dict) or record.get("id") is None:
            raise ValueError(f"Project record has no id: {record!r}")
        
        def upload_url(name: Optional[str], placeholder: Optional[str]) -> Optional[str]:
            return f"{api_url}/uploads/{name}" if name else placeholder
        
        return cls(
            id=int(record["id"]),
            title=record.get("title") or "",
            abstract=record.get("abstract") or "",
            tags=split_tags(record.get("tags")),
            department=record.get("department") or DEFAULT_DEPARTMENT,
            domain=record.get("domain") or "",
            thumbnail=upload_url(record.get("cover_poster"), PLACEHOLDER_THUMBNAIL),
            images=[
                upload_url(record.get("cover_poster"), PLACEHOLDER_COVER),
                upload_url(record.get("result"), PLACEHOLDER_RESULT),
                upload_url(record.get("methodology"), PLACEHOLDER_METHODOLOGY),
            ],
            demo_url=record.get("drive_link") or "#",
            likes=_first_count(record, "aggr_upvote_count", "votes_count"),
            comments=_first_count(record, "agggr_comment_count", "aggr_comment_count", "comments_count"),
            team=record.get("team_details") or "",
            mentor=record.get("mentor_name") or "",
            is_software=str(record.get("is_software", "")).lower() == "true",
            startup_potential=record.get("startup_potential") or "",
            uploaded_by=record.get("user_name") or "",
            pdf_poster=upload_url(record.get("pdf_poster"), None),
        )
    
    def to_dict(self) -> dict:
        """Plain dictionary for JSON responses."""
        return {
            "id": self.id,
            "title": self.title,
            "abstract": self.abstract,
            "tags": list(self.tags),
            "tech_stack": self.tech_stack,
            "department": self.department,
            "domain": self.domain,
            "thumbnail": self.thumbnail,
            "images": list(self.images),
            "demo_url": self.demo_url,
            "likes": self.likes,
            "comments": self.comments,
            "team": self.team,
            "mentor": self.mentor,
            "is_software": self.is_software,
            "startup_potential": self.startup_potential,
            "uploaded_by": self.uploaded_by,
            "pdf_poster": self.pdf_poster,
        }
    
    def __str__(self) -> str:
        return f"#{self.id} {self.title} [{self.department}] ({self.likes} likes)"


@dataclass
class Comment:
    """A comment on a project."""
    
    id: int
    user_name: str
    comment_text: str
    created_at: str = ""
    
    @classmethod
    def from_api(cls, record: dict) -> "Comment":
        return cls(
            id=record.get("id"),
            user_name=record.get("user_name") or "",
            comment_text=record.get("comment_text") or "",
            created_at=record.get("created_at") or "",
        )
    
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_name": self.user_name,
            "comment_text": self.comment_text,
            "created_at": self.created_at,
        }
    
    def __str__(self) -> str:
        return f"{self.user_name}: {self.comment_text}"
