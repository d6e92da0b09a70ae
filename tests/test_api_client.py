"""
Tests for the Open House API client.

Tests request construction, response parsing and error extraction
with mocked network calls.
"""

from unittest.mock import patch

import pytest
import requests

from openhouse.api.client import ApiError, OpenHouseClient, extract_error_message
from openhouse.models.project import Comment, Project

from conftest import API_URL, make_response


# =============================================================================
# Test Error Extraction
# =============================================================================

class TestExtractErrorMessage:
    """Tests for turning failed responses into user-facing messages."""
    
    def test_json_message_field(self):
        response = make_response(400, {"message": "Title already taken"}, reason="Bad Request")
        assert extract_error_message(response) == "Title already taken"
    
    def test_json_error_field(self):
        response = make_response(400, {"error": "Missing phone"})
        assert extract_error_message(response) == "Missing phone"
    
    def test_json_detail_field(self):
        response = make_response(422, {"detail": "Invalid department"})
        assert extract_error_message(response) == "Invalid department"
    
    def test_json_without_known_field_uses_raw_text(self):
        response = make_response(400, {"code": 17})
        assert extract_error_message(response) == '{"code": 17}'
    
    def test_plain_text_body(self):
        response = make_response(500, text="Database unavailable", reason="Internal Server Error")
        assert extract_error_message(response) == "Database unavailable"
    
    def test_html_body_is_not_parsed(self):
        html = "<!DOCTYPE html><html><body><h1>502 Bad Gateway</h1></body></html>"
        response = make_response(502, text=html, reason="Bad Gateway")
        
        message = extract_error_message(response)
        
        assert message == "Request failed: 502 Bad Gateway"
        assert "<h1>" not in message
    
    def test_bare_html_tag_is_not_parsed(self):
        response = make_response(500, text="  <html><body>oops</body></html>", reason="Server Error")
        assert extract_error_message(response) == "Request failed: 500 Server Error"
    
    def test_empty_body_uses_status_line(self):
        response = make_response(404, text="", reason="Not Found")
        assert extract_error_message(response) == "Request failed: 404 Not Found"


# =============================================================================
# Test Project Endpoints
# =============================================================================

class TestProjectEndpoints:
    """Tests for project listing, lookup and deletion."""
    
    def test_list_projects(self, client, sample_records):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(200, sample_records)
            
            projects = client.list_projects()
            
            mock_get.assert_called_once_with(f"{API_URL}/projects", timeout=5)
            assert [p.id for p in projects] == [1, 2, 3]
            assert all(isinstance(p, Project) for p in projects)
    
    def test_list_projects_skips_invalid_records(self, client, sample_records):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(200, sample_records + [{"title": "no id"}])
            
            projects = client.list_projects()
            
            assert len(projects) == 3
    
    def test_list_projects_rejects_non_list(self, client):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(200, {"projects": []})
            
            with pytest.raises(ApiError):
                client.list_projects()
    
    def test_list_my_projects_sends_user_name_header(self, client, sample_records):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(200, [sample_records[0]])
            
            projects = client.list_my_projects("asha.rao")
            
            args, kwargs = mock_get.call_args
            assert args[0] == f"{API_URL}/projects/me"
            assert kwargs["headers"]["user_name"] == "asha.rao"
            assert projects[0].id == 1
    
    def test_get_project(self, client, sample_records):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(200, sample_records[0])
            
            project = client.get_project(1)
            
            assert mock_get.call_args[0][0] == f"{API_URL}/projects/1"
            assert project.team_members == ["Asha Rao", "Ravi Kumar"]
    
    def test_delete_project_sends_owner(self, client):
        with patch("openhouse.api.client.requests.delete") as mock_delete:
            mock_delete.return_value = make_response(200, {"message": "deleted"})
            
            client.delete_project(1, "asha.rao")
            
            mock_delete.assert_called_once_with(
                f"{API_URL}/projects/1", timeout=5, json={"user_name": "asha.rao"}
            )


# =============================================================================
# Test Comment and Vote Endpoints
# =============================================================================

class TestEngagementEndpoints:
    """Tests for comments and upvotes."""
    
    def test_get_comments(self, client):
        payload = {
            "comments": [
                {"id": 1, "user_name": "Ravi", "comment_text": "Nice", "created_at": "2026-10-19T04:30:00Z"},
            ],
            "upvotes": 3,
        }
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(200, payload)
            
            comments = client.get_comments(1)
            
            assert mock_get.call_args[0][0] == f"{API_URL}/projects/1/comments-upvotes"
            assert comments == [Comment(1, "Ravi", "Nice", "2026-10-19T04:30:00Z")]
    
    def test_get_comments_without_list(self, client):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(200, {})
            assert client.get_comments(1) == []
    
    def test_add_comment(self, client):
        with patch("openhouse.api.client.requests.post") as mock_post:
            mock_post.return_value = make_response(201, {"id": 5})
            
            client.add_comment(1, "Asha Rao", "Great work")
            
            mock_post.assert_called_once_with(
                f"{API_URL}/projects/1/comments",
                timeout=5,
                json={"user_name": "Asha Rao", "comment_text": "Great work"},
            )
    
    def test_delete_comment_path(self, client):
        with patch("openhouse.api.client.requests.delete") as mock_delete:
            mock_delete.return_value = make_response(200, {})
            
            client.delete_comment(1, 55, "Asha Rao")
            
            assert mock_delete.call_args[0][0] == f"{API_URL}/projects/1/comment/55"
    
    def test_upvote_and_remove_vote(self, client):
        with patch("openhouse.api.client.requests.post") as mock_post, \
             patch("openhouse.api.client.requests.delete") as mock_delete:
            mock_post.return_value = make_response(200, {})
            mock_delete.return_value = make_response(200, {})
            
            client.upvote(1, "asha.rao")
            client.remove_vote(1, "asha.rao")
            
            assert mock_post.call_args[0][0] == f"{API_URL}/projects/1/upvote"
            assert mock_delete.call_args[0][0] == f"{API_URL}/projects/1/remove-vote"
            assert mock_delete.call_args[1]["json"] == {"user_name": "asha.rao"}


# =============================================================================
# Test Upload Endpoint
# =============================================================================

class TestUploadEndpoint:
    """Tests for the multipart upload call."""
    
    def test_upload_posts_multipart(self, client):
        fields = {"title": "Smart Irrigation", "user_name": "asha.rao"}
        files = {"cover_poster": ("cover.png", b"\x89PNG", "image/png")}
        with patch("openhouse.api.client.requests.post") as mock_post:
            mock_post.return_value = make_response(201, {"message": "Project uploaded"})
            
            result = client.upload_project(fields, files)
            
            mock_post.assert_called_once_with(
                f"{API_URL}/projects/upload-project",
                timeout=5,
                data=fields,
                files=files,
            )
            assert result.message == "Project uploaded"
    
    def test_upload_builds_message_from_id(self, client):
        with patch("openhouse.api.client.requests.post") as mock_post:
            mock_post.return_value = make_response(201, {"id": 77, "user_name": "asha.rao"})
            
            result = client.upload_project({"title": "T"}, {})
            
            assert result.message == "Successfully uploaded by asha.rao, Project Id: 77"
            assert result.project_id == 77
    
    def test_upload_without_files_sends_none(self, client):
        with patch("openhouse.api.client.requests.post") as mock_post:
            mock_post.return_value = make_response(201, {})
            
            result = client.upload_project({"title": "T"}, {})
            
            assert mock_post.call_args[1]["files"] is None
            assert result.message == ""


# =============================================================================
# Test Failure Handling
# =============================================================================

class TestFailures:
    """Tests for ApiError on transport and server failures."""
    
    def test_network_error_raises_api_error(self, client):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.side_effect = requests.ConnectionError("connection refused")
            
            with pytest.raises(ApiError) as exc_info:
                client.list_projects()
            
            assert exc_info.value.status_code is None
            assert "connection refused" in exc_info.value.message
    
    def test_http_error_carries_server_message(self, client):
        with patch("openhouse.api.client.requests.post") as mock_post:
            mock_post.return_value = make_response(400, {"error": "Phone number invalid"}, reason="Bad Request")
            
            with pytest.raises(ApiError) as exc_info:
                client.upload_project({"title": "T"}, {})
            
            assert exc_info.value.status_code == 400
            assert exc_info.value.message == "Phone number invalid"
    
    def test_html_error_page_is_tolerated(self, client, capsys):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(
                503, text="<!doctype html><title>Down</title>", reason="Service Unavailable"
            )
            
            with pytest.raises(ApiError) as exc_info:
                client.list_projects()
            
            assert exc_info.value.message == "Request failed: 503 Service Unavailable"
            assert "HTML error page" in capsys.readouterr().out
    
    def test_invalid_json_raises_api_error(self, client):
        with patch("openhouse.api.client.requests.get") as mock_get:
            mock_get.return_value = make_response(200, text="not json")
            
            with pytest.raises(ApiError, match="Invalid JSON"):
                client.list_projects()


class TestClientConfig:
    
    def test_strips_trailing_slash(self):
        assert OpenHouseClient(api_url="https://x.test/api/").api_url == "https://x.test/api"
    
    def test_defaults_from_config(self):
        from openhouse.config import OPENHOUSE_API_URL, REQUEST_TIMEOUT
        client = OpenHouseClient()
        assert client.api_url == OPENHOUSE_API_URL
        assert client.timeout == REQUEST_TIMEOUT
