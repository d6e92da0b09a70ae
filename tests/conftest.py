"""
Pytest Configuration and Fixtures

Shared fixtures for all tests:
- In-memory local storage
- Signed-in and anonymous sessions
- Raw API project records and normalized projects
- Fake HTTP responses for patched requests calls
- Identity tokens
"""

import json
import sys
from pathlib import Path
from unittest.mock import Mock

import jwt
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from openhouse.api.client import OpenHouseClient
from openhouse.auth.session import Session
from openhouse.models.project import Project
from openhouse.models.user import User
from openhouse.storage.json_file import MemoryStorage

API_URL = "https://api.test/api"


# =============================================================================
# HELPERS
# =============================================================================

def make_response(status_code=200, json_data=None, text=None, reason="OK"):
    """
    Build a fake requests.Response.
    
    json_data is returned by .json() and, unless text is given, also
    serialized into .text.
    """
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    response.url = f"{API_URL}/fake"
    
    if text is None:
        text = json.dumps(json_data) if json_data is not None else ""
    response.text = text
    
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    return response


def make_token(**claims):
    """Encode an identity token carrying claims."""
    return jwt.encode(claims, "test-secret", algorithm="HS256")


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def memory_storage():
    """Provide an empty in-memory storage backend."""
    return MemoryStorage()


@pytest.fixture
def sample_user():
    """A signed-in user."""
    return User(
        name="Asha Rao",
        email="asha.rao@vnrvjiet.in",
        picture="https://example.com/asha.png",
    )


@pytest.fixture
def session(sample_user):
    """A signed-in session with a fixed seed."""
    return Session(user=sample_user, seed=7)


@pytest.fixture
def anonymous_session():
    return Session(user=None, seed=7)


@pytest.fixture
def sample_records():
    """Raw project records as returned by GET /projects."""
    return [
        {
            "id": 1,
            "title": "Smart Irrigation",
            "abstract": "Soil sensors drive the pumps.",
            "tags": "iot, agriculture",
            "domain": "IoT",
            "department": "ECE",
            "cover_poster": "cover1.png",
            "result": "result1.png",
            "methodology": "method1.png",
            "pdf_poster": "poster1.pdf",
            "drive_link": "https://drive.example.com/1",
            "team_details": "Asha Rao\n  Ravi Kumar  \n\n",
            "mentor_name": "Dr. Mehta",
            "is_software": "false",
            "startup_potential": "yes",
            "user_name": "asha.rao",
            "aggr_upvote_count": 5,
            "agggr_comment_count": 2,
        },
        {
            "id": 2,
            "title": "Campus Chatbot",
            "abstract": "Answers admission questions.",
            "tags": "ml, nlp",
            "domain": "AI",
            "department": "CSE",
            "is_software": "true",
            "user_name": "ravi",
        },
        {
            "id": 3,
            "title": "Bridge Monitor",
            "abstract": "Strain gauges over LoRa.",
            "tags": "iot",
            "department": "CE",
        },
    ]


@pytest.fixture
def sample_projects(sample_records):
    """Normalized projects for sample_records."""
    return [Project.from_api(record, API_URL) for record in sample_records]


@pytest.fixture
def client():
    """An OpenHouseClient pointed at a fake base URL."""
    return OpenHouseClient(api_url=API_URL, timeout=5)


@pytest.fixture
def mock_client(sample_projects):
    """Provide a mock API client instance."""
    mock = Mock(spec=OpenHouseClient)
    mock.api_url = API_URL
    mock.list_projects.return_value = list(sample_projects)
    mock.list_my_projects.return_value = [sample_projects[0]]
    mock.get_project.return_value = sample_projects[0]
    mock.get_comments.return_value = []
    return mock


# =============================================================================
# MARKERS FOR TEST CATEGORIES
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "config_validation: Configuration validation tests"
    )
    config.addinivalue_line(
        "markers", "cli_behavior: CLI interface tests"
    )
