"""
Open House Explorer - Web API

A small Flask service exposing the notes store and the project showcase
as JSON endpoints. The signed-in identity travels in the "user" cookie
(URL-encoded JSON), exactly as the browser client stores it.

Run with: python -m web.app
Or: cd web && python app.py
"""

from collections import OrderedDict
import sys
import threading
from pathlib import Path
from typing import Tuple

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, request, jsonify
from openhouse.api import ApiError, OpenHouseClient
from openhouse.auth import (
    AuthenticationRequired,
    Session,
    decode_credential,
    decode_user_cookie,
    encode_user_cookie,
    new_seed,
    USER_COOKIE,
)
from openhouse.config import WEB_HOST, WEB_PORT, DEBUG
from openhouse.gallery import (
    Gallery,
    LikedProjects,
    MyProjects,
    ProjectDetail,
    ProjectFilter,
    filter_projects,
)
from openhouse.notes import NoteStore
from openhouse.storage import JsonFileStorage, KeyValueStorage
from openhouse.upload import (
    DEPARTMENTS,
    FILE_FIELDS,
    STARTUP_POTENTIAL_CHOICES,
    TEXT_FIELDS,
    UploadFile,
    UploadForm,
)
from openhouse.upload.validators import (
    MAX_ABSTRACT_WORDS,
    MAX_IMAGE_SIZE_MB,
    MAX_PDF_SIZE_MB,
    MAX_TEAM_DETAILS_WORDS,
    MAX_TITLE_WORDS,
)

app = Flask(__name__)

SEED_COOKIE = "gallery_seed"


# =============================================================================
# Session and dependencies
# =============================================================================

# Galleries are fetched once per session: keyed by (email, seed), least
# recently used first. Shared across request threads; filters are built per
# request.
MAX_CACHED_GALLERIES = 128
_galleries: "OrderedDict[Tuple[str, int], Gallery]" = OrderedDict()
_galleries_lock = threading.Lock()


def get_local_storage() -> KeyValueStorage:
    """Get configured local storage."""
    return JsonFileStorage()


def get_client() -> OpenHouseClient:
    """Get a client for the configured API."""
    return OpenHouseClient()


def current_session() -> Session:
    """Build the Session for this request from its cookies."""
    user = decode_user_cookie(request.cookies.get(USER_COOKIE))
    try:
        seed = int(request.cookies.get(SEED_COOKIE, ""))
    except ValueError:
        seed = 0
    return Session(user=user, seed=seed)


def session_gallery(session: Session, refresh: bool = False) -> Gallery:
    user = session.require_user()
    key = (user.email, session.seed)
    with _galleries_lock:
        gallery = _galleries.get(key)
        if gallery is None:
            gallery = Gallery(get_client(), session)
            _galleries[key] = gallery
            while len(_galleries) > MAX_CACHED_GALLERIES:
                _galleries.popitem(last=False)
        else:
            _galleries.move_to_end(key)
    gallery.load(force=refresh)
    return gallery


@app.errorhandler(AuthenticationRequired)
def handle_authentication_required(error):
    return jsonify({"error": "Login required"}), 401


# =============================================================================
# Notes
# =============================================================================

@app.route("/api/notes", methods=["GET"])
def api_notes():
    """List all notes."""
    store = NoteStore(get_local_storage())
    return jsonify({"notes": [note.to_dict() for note in store.notes]})


@app.route("/api/notes", methods=["POST"])
def api_add_note():
    """Add an empty draft note."""
    store = NoteStore(get_local_storage())
    note = store.add()
    return jsonify(note.to_dict()), 201


@app.route("/api/notes/<int:note_id>", methods=["PATCH"])
def api_update_note(note_id):
    """Merge text and/or saved into a note."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object required"}), 400

    store = NoteStore(get_local_storage())
    try:
        note = store.update(note_id, **data)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    if note is None:
        return jsonify({"error": f"Note not found: {note_id}"}), 404
    return jsonify(note.to_dict())


# =============================================================================
# Identity
# =============================================================================

@app.route("/api/login", methods=["POST"])
def api_login():
    """Exchange an identity token for the user cookie."""
    data = request.get_json(silent=True) or {}
    credential = data.get("credential")
    if not credential:
        return jsonify({"error": "credential is required"}), 400

    user = decode_credential(credential)
    if user is None:
        return jsonify({"error": "Invalid identity token"}), 401

    response = jsonify({"user": user.to_dict(), "user_name": user.user_name})
    response.set_cookie(USER_COOKIE, encode_user_cookie(user), path="/", samesite="Lax")
    response.set_cookie(SEED_COOKIE, str(new_seed()), path="/", samesite="Lax")
    return response


@app.route("/api/logout", methods=["POST"])
def api_logout():
    """Clear the user cookie and drop the cached gallery."""
    session = current_session()
    if session.user is not None:
        with _galleries_lock:
            for key in [k for k in _galleries if k[0] == session.user.email]:
                del _galleries[key]

    response = jsonify({"status": "signed out"})
    response.delete_cookie(USER_COOKIE, path="/")
    response.delete_cookie(SEED_COOKIE, path="/")
    return response


@app.route("/api/me")
def api_me():
    user = current_session().require_user()
    return jsonify({"user": user.to_dict(), "user_name": user.user_name})


# =============================================================================
# Gallery
# =============================================================================

@app.route("/api/projects")
def api_projects():
    """
    Filtered gallery listing.

    Query parameters (repeatable):
        tag: keep projects carrying any of these tags
        department: keep projects from any of these departments
        refresh: "1" to re-fetch instead of using the session's list
    """
    session = current_session()
    gallery = session_gallery(session, refresh=request.args.get("refresh") == "1")

    selection = ProjectFilter(
        tags=set(request.args.getlist("tag")),
        departments=set(request.args.getlist("department")),
    )
    visible = filter_projects(gallery.load(), selection)

    return jsonify({
        "projects": [project.to_dict() for project in visible],
        "count": len(visible),
        "tags": gallery.tags,
        "departments": gallery.departments,
        "error": gallery.error,
    })


@app.route("/api/projects/mine")
def api_my_projects():
    view = MyProjects(get_client(), current_session())
    projects = view.load()
    return jsonify({"projects": [project.to_dict() for project in projects]})


@app.route("/api/projects/<int:project_id>", methods=["DELETE"])
def api_delete_project(project_id):
    view = MyProjects(get_client(), current_session())
    if not view.delete(project_id):
        return jsonify({"error": "Failed to delete the project. Please try again."}), 502
    return jsonify({"deleted": project_id})


def _open_detail(project_id: int) -> ProjectDetail:
    session = current_session()
    session.require_user()
    client = get_client()
    project = client.get_project(project_id)
    detail = ProjectDetail(client, session, project, LikedProjects(get_local_storage()))
    detail.load()
    return detail


def _detail_payload(detail: ProjectDetail) -> dict:
    return {
        "project": detail.project.to_dict(),
        "team_members": detail.team_members,
        "comments": [comment.to_dict() for comment in detail.comments],
        "is_liked": detail.is_liked,
    }


@app.route("/api/projects/<int:project_id>")
def api_project_detail(project_id):
    try:
        detail = _open_detail(project_id)
    except ApiError as e:
        return jsonify({"error": e.message}), 502
    return jsonify(_detail_payload(detail))


@app.route("/api/projects/<int:project_id>/like", methods=["POST"])
def api_toggle_like(project_id):
    try:
        detail = _open_detail(project_id)
    except ApiError as e:
        return jsonify({"error": e.message}), 502

    if not detail.toggle_like():
        return jsonify({"error": "Could not update like"}), 502
    return jsonify(_detail_payload(detail))


@app.route("/api/projects/<int:project_id>/comments", methods=["POST"])
def api_add_comment(project_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        return jsonify({"error": "Comment text is required"}), 400

    try:
        detail = _open_detail(project_id)
    except ApiError as e:
        return jsonify({"error": e.message}), 502

    if not detail.add_comment(text):
        return jsonify({"error": "Error adding comment"}), 502
    return jsonify(_detail_payload(detail)), 201


@app.route("/api/projects/<int:project_id>/comments/<int:comment_id>", methods=["DELETE"])
def api_delete_comment(project_id, comment_id):
    try:
        detail = _open_detail(project_id)
    except ApiError as e:
        return jsonify({"error": e.message}), 502

    if not detail.delete_comment(comment_id):
        return jsonify({"error": "Error deleting comment"}), 502
    return jsonify(_detail_payload(detail))


# =============================================================================
# Upload
# =============================================================================

@app.route("/api/upload/options")
def api_upload_options():
    """Choices and limits the upload form needs."""
    return jsonify({
        "departments": DEPARTMENTS,
        "startup_potential": STARTUP_POTENTIAL_CHOICES,
        "max_words": {
            "title": MAX_TITLE_WORDS,
            "abstract": MAX_ABSTRACT_WORDS,
            "team_details": MAX_TEAM_DETAILS_WORDS,
        },
        "max_size_mb": {
            "image": MAX_IMAGE_SIZE_MB,
            "pdf": MAX_PDF_SIZE_MB,
        },
    })


@app.route("/api/upload", methods=["POST"])
def api_upload():
    """
    Validate and forward a multipart project upload.

    Form fields use the upload field names (title, team_details, ...);
    is_software is "true" or "false".
    """
    session = current_session()
    session.require_user()
    form = UploadForm(get_client(), session)

    for name in TEXT_FIELDS:
        form.set_field(name, request.form.get(name, ""))
    form.set_field("is_software", request.form.get("is_software", "").lower() == "true")

    for name in FILE_FIELDS:
        storage = request.files.get(name)
        if storage is None or not storage.filename:
            continue
        upload_file = UploadFile(
            filename=storage.filename,
            content=storage.read(),
            content_type=storage.mimetype or "application/octet-stream",
        )
        form.choose_file(name, upload_file)

    outcome = form.submit()
    body = {
        "success": outcome.success,
        "status": {"message": outcome.status.message, "type": outcome.status.kind},
        "errors": outcome.errors,
        "focus_field": outcome.focus_field,
    }
    if outcome.success:
        body["project_id"] = outcome.result.project_id
        return jsonify(body), 201
    return jsonify(body), 400 if not outcome.submitted else 502


if __name__ == "__main__":
    print("=" * 50)
    print("🚀 Open House Explorer API")
    print("=" * 50)
    print(f"Listening on http://{WEB_HOST}:{WEB_PORT}")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=DEBUG, host=WEB_HOST, port=WEB_PORT)
