#!/usr/bin/env python3
"""
Open House Explorer - command-line client.

Two independent tools share this entry point:
  - Sticky notes kept in local storage
  - The Open House project showcase (browse, like, comment, upload)

Usage:
    python main.py notes add                      # New draft note
    python main.py notes save 1700000000000 "Hi"  # Save text into a note
    python main.py login <identity-token>         # Start a session
    python main.py projects --tag iot             # Browse filtered projects
    python main.py upload --title ... --phone ... # Upload a project

Examples:
    # Browse ECE projects tagged "iot" or "ml", in a reproducible order
    python main.py projects --department ECE --tag iot --tag ml --seed 7

    # Like a project, then comment on it
    python main.py like 42
    python main.py comment 42 "Great demo!"
"""

import argparse
import sys

from openhouse.api import ApiError, OpenHouseClient
from openhouse.auth import AuthenticationRequired, Session, SessionStore
from openhouse.config import DEBUG, print_config_summary, validate_config
from openhouse.gallery import (
    Gallery,
    LikedProjects,
    MyProjects,
    ProjectDetail,
    format_comment_date,
)
from openhouse.notes import NoteStore
from openhouse.storage import JsonFileStorage, KeyValueStorage
from openhouse.upload import (
    DEPARTMENTS,
    FILE_FIELDS,
    STARTUP_POTENTIAL_CHOICES,
    UploadFile,
    UploadForm,
)


def get_local_storage() -> KeyValueStorage:
    """Get the configured local storage backend."""
    return JsonFileStorage()


def get_client() -> OpenHouseClient:
    """Get a client for the configured API."""
    return OpenHouseClient()


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="openhouse",
        description="Sticky notes and the Open House project showcase.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s notes list                      Show all notes
  %(prog)s login TOKEN                     Sign in with an identity token
  %(prog)s projects --tag iot              Projects tagged "iot"
  %(prog)s show 42                         Project details and comments
  %(prog)s mine                            Your uploaded projects
        """,
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    # Notes
    notes = commands.add_parser("notes", help="Manage sticky notes")
    note_actions = notes.add_subparsers(dest="notes_action", metavar="ACTION", required=True)
    note_actions.add_parser("list", help="List notes")
    note_actions.add_parser("add", help="Add an empty draft note")
    save = note_actions.add_parser("save", help="Save text into a note")
    save.add_argument("id", type=int, help="Note id")
    save.add_argument("text", help="Note text")
    edit = note_actions.add_parser("edit", help="Reopen a saved note as a draft")
    edit.add_argument("id", type=int, help="Note id")

    # Session
    login = commands.add_parser("login", help="Sign in with an identity token")
    login.add_argument("credential", help="Encoded identity token")
    commands.add_parser("logout", help="Forget the signed-in user")
    commands.add_parser("whoami", help="Show the signed-in user")

    # Gallery
    projects = commands.add_parser("projects", help="Browse projects")
    projects.add_argument(
        "--tag", "-t",
        action="append",
        default=[],
        metavar="TAG",
        help="Only projects with this tag (repeatable; any tag matches)",
    )
    projects.add_argument(
        "--department", "-d",
        action="append",
        default=[],
        metavar="DEPT",
        help="Only projects from this department (repeatable)",
    )
    projects.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Shuffle seed (default: the session's seed)",
    )
    projects.add_argument(
        "--vocabulary",
        action="store_true",
        help="Also list all known tags and departments",
    )

    show = commands.add_parser("show", help="Show a project with comments")
    show.add_argument("id", type=int, help="Project id")

    like = commands.add_parser("like", help="Like or unlike a project")
    like.add_argument("id", type=int, help="Project id")

    comment = commands.add_parser("comment", help="Comment on a project")
    comment.add_argument("id", type=int, help="Project id")
    comment.add_argument("text", help="Comment text")

    uncomment = commands.add_parser("uncomment", help="Delete a comment")
    uncomment.add_argument("id", type=int, help="Project id")
    uncomment.add_argument("comment_id", type=int, help="Comment id")

    commands.add_parser("mine", help="List your uploaded projects")

    delete = commands.add_parser("delete", help="Delete one of your projects")
    delete.add_argument("id", type=int, help="Project id")

    # Upload
    upload = commands.add_parser("upload", help="Upload a new project")
    upload.add_argument("--title", default="")
    upload.add_argument("--abstract", default="")
    upload.add_argument("--team-details", default="")
    upload.add_argument("--department", default="", choices=[""] + DEPARTMENTS)
    upload.add_argument("--tags", default="", help="Comma-separated keywords")
    upload.add_argument("--domain", default="")
    upload.add_argument("--software", action="store_true", help="Software-only project")
    upload.add_argument("--mentor", default="", help="Faculty mentor name")
    upload.add_argument("--startup-potential", default="", choices=[""] + STARTUP_POTENTIAL_CHOICES)
    upload.add_argument("--drive-link", default="")
    upload.add_argument("--phone", default="", help="Team lead phone number (10 digits)")
    upload.add_argument("--methodology", metavar="IMAGE", help="Methodology image")
    upload.add_argument("--result", metavar="IMAGE", help="Result image")
    upload.add_argument("--cover-poster", metavar="IMAGE", help="Cover poster image")
    upload.add_argument("--pdf-poster", metavar="PDF", help="PDF poster")

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Open House Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


# =============================================================================
# Command handlers
# =============================================================================

def run_notes(args: argparse.Namespace, storage: KeyValueStorage) -> int:
    store = NoteStore(storage)

    if args.notes_action == "list":
        if not store.notes:
            print("No notes yet. Add one with: notes add")
        for note in store.notes:
            print(note)
        return 0

    if args.notes_action == "add":
        note = store.add()
        print(f"Added note {note.id}")
        return 0

    if args.notes_action == "save":
        note = store.save(args.id, args.text)
    else:
        note = store.edit(args.id)

    if note is None:
        print(f"No note with id {args.id}")
        return 1
    print(note)
    return 0


def run_login(args: argparse.Namespace, storage: KeyValueStorage) -> int:
    session = SessionStore(storage).login(args.credential)
    if session is None:
        print("❌ Could not read the identity token")
        return 1
    print(f"Signed in as {session.user}")
    return 0


def print_project(project, verbose: bool = False) -> None:
    print(f"  {project}")
    if project.tags:
        print(f"      Tags: {', '.join(project.tags)}")
    if verbose:
        print(f"      Abstract: {project.abstract}")
        print(f"      Mentor: {project.mentor or '-'}")
        print(f"      Demo: {project.demo_url}")
        if project.pdf_poster:
            print(f"      Poster: {project.pdf_poster}")


def run_projects(args: argparse.Namespace, session: Session, client: OpenHouseClient) -> int:
    if args.seed is not None:
        session.seed = args.seed

    gallery = Gallery(client, session)
    gallery.load()
    if gallery.error:
        print(f"❌ Failed to fetch projects: {gallery.error}")
        return 1

    gallery.selection.tags.update(args.tag)
    gallery.selection.departments.update(args.department)

    if args.vocabulary:
        print(f"Tags: {', '.join(gallery.tags) or '(none)'}")
        print(f"Departments: {', '.join(gallery.departments) or '(none)'}")
        print()

    visible = gallery.visible_projects()
    print(f"{len(visible)} project(s)")
    for project in visible:
        print_project(project)
    return 0


def run_mine(session: Session, client: OpenHouseClient) -> int:
    view = MyProjects(client, session)
    projects = view.load()
    print(f"{len(projects)} project(s) uploaded by {session.user.user_name}")
    for project in projects:
        print_project(project)
    return 0


def run_delete(args: argparse.Namespace, session: Session, client: OpenHouseClient) -> int:
    if not MyProjects(client, session).delete(args.id):
        print(f"❌ Failed to delete project {args.id}")
        return 1
    print(f"Deleted project {args.id}")
    return 0


def open_detail(
    project_id: int,
    session: Session,
    client: OpenHouseClient,
    storage: KeyValueStorage,
) -> ProjectDetail:
    project = client.get_project(project_id)
    detail = ProjectDetail(client, session, project, LikedProjects(storage))
    detail.load()
    return detail


def run_detail_command(
    args: argparse.Namespace,
    session: Session,
    client: OpenHouseClient,
    storage: KeyValueStorage,
) -> int:
    try:
        detail = open_detail(args.id, session, client, storage)
    except ApiError as e:
        print(f"❌ Failed to load project {args.id}: {e.message}")
        return 1

    if args.command == "like":
        if not detail.toggle_like():
            print("❌ Could not update like")
            return 1
        state = "Liked" if detail.is_liked else "Unliked"
        print(f"{state} {detail.project}")
        return 0

    if args.command == "comment":
        if not detail.add_comment(args.text):
            print("❌ Comment was not posted")
            return 1
        print(f"Commented on {detail.project}")
        return 0

    if args.command == "uncomment":
        if not detail.delete_comment(args.comment_id):
            print("❌ Comment was not deleted")
            return 1
        print(f"Deleted comment {args.comment_id}")
        return 0

    print_project(detail.project, verbose=True)
    if detail.team_members:
        print("      Team:")
        for member in detail.team_members:
            print(f"        - {member}")
    print(f"      Liked: {'yes' if detail.is_liked else 'no'}")
    print(f"\nComments ({len(detail.comments)}):")
    for comment in detail.comments:
        print(f"  [{comment.id}] {format_comment_date(comment.created_at)} {comment}")
    return 0


def run_upload(args: argparse.Namespace, session: Session, client: OpenHouseClient) -> int:
    form = UploadForm(client, session)

    form.set_field("title", args.title)
    form.set_field("abstract", args.abstract)
    form.set_field("team_details", args.team_details)
    form.set_field("department", args.department)
    form.set_field("tags", args.tags)
    form.set_field("domain", args.domain)
    form.set_field("is_software", args.software)
    form.set_field("mentor_name", args.mentor)
    form.set_field("startup_potential", args.startup_potential)
    form.set_field("drive_link", args.drive_link)
    form.set_field("phone_number", args.phone)

    for name in FILE_FIELDS:
        path = getattr(args, name)
        if not path:
            continue
        try:
            upload_file = UploadFile.from_path(path)
        except OSError as e:
            print(f"❌ Cannot read {path}: {e}")
            return 1
        form.choose_file(name, upload_file)

    outcome = form.submit()
    if not outcome.success:
        for name, error in outcome.errors.items():
            marker = "→" if name == outcome.focus_field else " "
            print(f" {marker} {name}: {error}")

    icon = "✓" if outcome.success else "❌"
    print(f"{icon} {outcome.status.message}")
    return 0 if outcome.success else 1


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle --show-config
    if args.show_config:
        show_config()
        return 0

    if not args.command:
        parser.print_help()
        return 1

    try:
        storage = get_local_storage()

        if args.command == "notes":
            return run_notes(args, storage)
        if args.command == "login":
            return run_login(args, storage)

        sessions = SessionStore(storage)
        if args.command == "logout":
            sessions.logout()
            print("Signed out")
            return 0

        session = sessions.current()
        if args.command == "whoami":
            if not session.is_authenticated:
                print("Not signed in")
                return 1
            print(session.user)
            return 0

        session.require_user()
        client = get_client()

        if args.command == "projects":
            return run_projects(args, session, client)
        if args.command == "mine":
            return run_mine(session, client)
        if args.command == "delete":
            return run_delete(args, session, client)
        if args.command == "upload":
            return run_upload(args, session, client)
        return run_detail_command(args, session, client, storage)

    except AuthenticationRequired:
        print("❌ Not signed in. Run: login <identity-token>")
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"\n❌ Error: {e}")
        if DEBUG:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
