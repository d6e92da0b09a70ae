"""
Open House API client.

Wraps the project showcase REST API. Every call goes through requests with
the configured timeout; there is no retry and no caching.

Endpoints:
    GET    /projects                          all projects
    GET    /projects/me                       projects of header user_name
    GET    /projects/{id}                     one project
    GET    /projects/{id}/comments-upvotes    {"comments": [...]}
    POST   /projects/{id}/comments            {"user_name", "comment_text"}
    DELETE /projects/{id}/comment/{cid}       {"user_name"}
    POST   /projects/{id}/upvote              {"user_name"}
    DELETE /projects/{id}/remove-vote         {"user_name"}
    DELETE /projects/{id}                     {"user_name"}
    POST   /projects/upload-project           multipart form

Responses are JSON. Error bodies may be HTML pages; those are never parsed
for an error message.
"""

from dataclasses import dataclass, field
import json
from typing import Any, Dict, List, Optional, Tuple
import requests

from openhouse.config import OPENHOUSE_API_URL, REQUEST_TIMEOUT
from openhouse.models.project import Comment, Project

# Multipart file part: (filename, content, content_type)
FilePart = Tuple[str, bytes, str]


class ApiError(Exception):
    """
    Raised when a request fails or the API answers with a non-2xx status.
    
    Attributes:
        message: Human-readable reason, taken from the server when possible.
        status_code: HTTP status, or None for transport failures.
    """
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class UploadResult:
    """Outcome of a successful project upload."""
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def project_id(self) -> Optional[int]:
        return self.data.get("id")


def _looks_like_html(text: str) -> bool:
    head = text.strip().lower()
    return head.startswith("<!doctype html") or head.startswith("<html")


def extract_error_message(response: requests.Response) -> str:
    """
    Best-effort error text for a failed response.
    
    JSON bodies contribute their "message", "error" or "detail" field,
    plain-text bodies are used verbatim, and HTML error pages are ignored
    in favour of the generic status line.
    
    Args:
        response: The non-2xx response.
        
    Returns:
        Error message suitable for showing to the user.
    """
    message = f"Request failed: {response.status_code} {response.reason}"
    
    text = response.text or ""
    if not text.strip():
        return message
    
    if _looks_like_html(text):
        print("[openhouse-api] Server returned an HTML error page instead of JSON/text")
        return message
    
    try:
        body = json.loads(text)
    except ValueError:
        return text.strip()
    
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if body.get(key):
                return str(body[key])
    return text.strip()


class OpenHouseClient:
    """
    Client for the Open House project API.
    
    Methods raise ApiError on any failure; callers decide whether to
    surface or swallow it.
    """
    
    def __init__(self, api_url: str = None, timeout: int = None):
        """
        Initialize OpenHouseClient.
        
        Args:
            api_url: Base URL. Defaults to config.OPENHOUSE_API_URL.
            timeout: Request timeout in seconds. Defaults to config.REQUEST_TIMEOUT.
        """
        self.api_url = (api_url if api_url is not None else OPENHOUSE_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT
    
    @property
    def name(self) -> str:
        return "openhouse-api"
    
    # =========================================================================
    # Transport
    # =========================================================================
    
    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """
        Issue a request and fail on transport errors or non-2xx statuses.
        
        Args:
            method: "get", "post" or "delete".
            path: Path below the API base URL.
            **kwargs: Passed through to requests.
            
        Returns:
            The successful response.
        """
        url = f"{self.api_url}{path}"
        send = getattr(requests, method)
        
        try:
            response = send(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            print(f"[{self.name}] {method.upper()} {path} failed: {e}")
            raise ApiError(f"Network error: {e}") from e
        
        if not response.ok:
            message = extract_error_message(response)
            print(f"[{self.name}] {method.upper()} {path} -> {response.status_code}: {message}")
            raise ApiError(message, response.status_code)
        
        return response
    
    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            print(f"[{self.name}] Invalid JSON from {response.url}: {e}")
            raise ApiError("Invalid JSON in API response", response.status_code) from e
    
    def _to_projects(self, records: Any) -> List[Project]:
        if not isinstance(records, list):
            raise ApiError("Expected a list of projects")
        
        projects: List[Project] = []
        for record in records:
            try:
                projects.append(Project.from_api(record, self.api_url))
            except (TypeError, ValueError) as e:
                print(f"[{self.name}] Skipping invalid project record: {e}")
        return projects
    
    # =========================================================================
    # Projects
    # =========================================================================
    
    def list_projects(self) -> List[Project]:
        """Fetch every project."""
        return self._to_projects(self._json(self._request("get", "/projects")))
    
    def list_my_projects(self, user_name: str) -> List[Project]:
        """Fetch the projects uploaded by user_name."""
        response = self._request(
            "get",
            "/projects/me",
            headers={"Content-Type": "application/json", "user_name": user_name},
        )
        return self._to_projects(self._json(response))
    
    def get_project(self, project_id: int) -> Project:
        data = self._json(self._request("get", f"/projects/{project_id}"))
        try:
            return Project.from_api(data, self.api_url)
        except (TypeError, ValueError) as e:
            raise ApiError(f"Invalid project record: {e}") from e
    
    def delete_project(self, project_id: int, user_name: str) -> None:
        self._request("delete", f"/projects/{project_id}", json={"user_name": user_name})
    
    def upload_project(
        self,
        fields: Dict[str, str],
        files: Dict[str, FilePart],
    ) -> UploadResult:
        """
        Submit a new project as multipart form data.
        
        Args:
            fields: Text parts keyed by wire name (title, abstract, ...).
            files: File parts keyed by wire name (methodology, result,
                cover_poster, pdf_poster). Absent files are omitted.
                
        Returns:
            UploadResult with the server's message, or one built from the
            returned project id and uploader.
        """
        print(f"[{self.name}] Uploading project with parts: {', '.join(list(fields) + list(files))}")
        response = self._request(
            "post",
            "/projects/upload-project",
            data=fields,
            files=files or None,
        )
        data = self._json(response)
        if not isinstance(data, dict):
            data = {}
        
        message = data.get("message") or ""
        if not message and data.get("user_name") and data.get("id"):
            message = f"Successfully uploaded by {data['user_name']}, Project Id: {data['id']}"
        
        return UploadResult(message=message, data=data)
    
    # =========================================================================
    # Comments and votes
    # =========================================================================
    
    def get_comments(self, project_id: int) -> List[Comment]:
        data = self._json(self._request("get", f"/projects/{project_id}/comments-upvotes"))
        records = data.get("comments") if isinstance(data, dict) else None
        return [Comment.from_api(record) for record in records or [] if isinstance(record, dict)]
    
    def add_comment(self, project_id: int, user_name: str, comment_text: str) -> None:
        self._request(
            "post",
            f"/projects/{project_id}/comments",
            json={"user_name": user_name, "comment_text": comment_text},
        )
    
    def delete_comment(self, project_id: int, comment_id: int, user_name: str) -> None:
        self._request(
            "delete",
            f"/projects/{project_id}/comment/{comment_id}",
            json={"user_name": user_name},
        )
    
    def upvote(self, project_id: int, user_name: str) -> None:
        self._request("post", f"/projects/{project_id}/upvote", json={"user_name": user_name})
    
    def remove_vote(self, project_id: int, user_name: str) -> None:
        self._request("delete", f"/projects/{project_id}/remove-vote", json={"user_name": user_name})
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} api_url={self.api_url!r}>"
