"""
Upload form field validators.

Every field has its own validator, looked up by field name in
FIELD_VALIDATORS. A validator takes the field's current value and returns
an error message, or None when the value is acceptable.

Text fields are required and some have word limits; the drive link is
optional but must be a URL when given; the phone number must be exactly
ten digits. File fields are optional, but a chosen file must have the
right MIME class and stay under its size ceiling.
"""

from dataclasses import dataclass
import mimetypes
from pathlib import Path
import re
from typing import Any, Callable, Dict, Optional, Tuple, Union
from urllib.parse import urlparse


# =============================================================================
# Limits and choices
# =============================================================================

MAX_TITLE_WORDS = 20
MAX_ABSTRACT_WORDS = 200
MAX_TEAM_DETAILS_WORDS = 60

MAX_IMAGE_SIZE_MB = 1
MAX_PDF_SIZE_MB = 2
MAX_IMAGE_SIZE_BYTES = MAX_IMAGE_SIZE_MB * 1024 * 1024
MAX_PDF_SIZE_BYTES = MAX_PDF_SIZE_MB * 1024 * 1024

DEPARTMENTS = [
    "CE", "EEE", "ECE", "ME", "CSE", "CS-AIML", "CS-DS",
    "CS-IOT", "CS-CyS", "AI & DS", "CSBS", "EIE", "IT", "AE",
]

STARTUP_POTENTIAL_CHOICES = ["yes", "no", "maybe"]

TEXT_FIELDS = (
    "title",
    "abstract",
    "team_details",
    "department",
    "tags",
    "domain",
    "mentor_name",
    "startup_potential",
    "drive_link",
    "phone_number",
)
IMAGE_FIELDS = ("methodology", "result", "cover_poster")
PDF_FIELDS = ("pdf_poster",)
FILE_FIELDS = IMAGE_FIELDS + PDF_FIELDS

# Order fields appear in on the form; the first invalid one gets focus
FIELD_ORDER = TEXT_FIELDS + FILE_FIELDS

_PHONE_RE = re.compile(r"[0-9]{10}")


@dataclass
class UploadFile:
    """
    A file chosen for one of the upload's file fields.
    
    Attributes:
        filename: Name sent with the multipart part.
        content: Raw bytes.
        content_type: MIME type as reported by the chooser.
    """
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
    
    @property
    def size(self) -> int:
        return len(self.content)
    
    @classmethod
    def from_path(cls, path: Union[Path, str]) -> "UploadFile":
        """Read a file from disk, guessing its MIME type from the name."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )
    
    def to_part(self) -> Tuple[str, bytes, str]:
        """(filename, content, content_type) for a requests multipart upload."""
        return (self.filename, self.content, self.content_type)


def count_words(text: Optional[str]) -> int:
    """Number of whitespace-separated words in text."""
    if not text:
        return 0
    return len(text.split())


# =============================================================================
# Validator factories
# =============================================================================

def _required(message: str) -> Callable[[Any], Optional[str]]:
    def validate(value: Any) -> Optional[str]:
        if not value or not str(value).strip():
            return message
        return None
    return validate


def _required_words(label: str, required_message: str, limit: int) -> Callable[[Any], Optional[str]]:
    def validate(value: Any) -> Optional[str]:
        if not value or not str(value).strip():
            return required_message
        if count_words(value) > limit:
            return f"{label} cannot exceed {limit} words."
        return None
    return validate


def _image(value: Optional[UploadFile]) -> Optional[str]:
    if value is None:
        return None
    if not (value.content_type or "").startswith("image/"):
        return "Invalid file type. Please select an image."
    if value.size > MAX_IMAGE_SIZE_BYTES:
        return f"Image exceeds {MAX_IMAGE_SIZE_MB}MB size limit."
    return None


def _pdf(value: Optional[UploadFile]) -> Optional[str]:
    if value is None:
        return None
    if "pdf" not in (value.content_type or ""):
        return "Invalid file type. Please select a PDF."
    if value.size > MAX_PDF_SIZE_BYTES:
        return f"PDF Poster exceeds {MAX_PDF_SIZE_MB}MB size limit."
    return None


def is_valid_url(value: str) -> bool:
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        # Malformed netloc, e.g. an unbalanced "[" host
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def _drive_link(value: Any) -> Optional[str]:
    if not value or not str(value).strip():
        return None
    if not is_valid_url(str(value)):
        return "Please enter a valid URL format (e.g., https://...)."
    return None


def is_valid_phone_number(value: str) -> bool:
    return _PHONE_RE.fullmatch(value) is not None


def _phone_number(value: Any) -> Optional[str]:
    if not value:
        return "Phone number is required."
    if not is_valid_phone_number(str(value)):
        return "Phone number must be 10 digits."
    return None


FIELD_VALIDATORS: Dict[str, Callable[[Any], Optional[str]]] = {
    "title": _required_words("Title", "Title is required.", MAX_TITLE_WORDS),
    "abstract": _required_words("Abstract", "Abstract is required.", MAX_ABSTRACT_WORDS),
    "team_details": _required_words("Team Details", "Team Details are required.", MAX_TEAM_DETAILS_WORDS),
    "department": _required("Department selection is required."),
    "tags": _required("Tags (keywords) are required."),
    "domain": _required("Domain is required."),
    "mentor_name": _required("Faculty Mentor Name is required."),
    "startup_potential": _required("Startup potential selection is required."),
    "drive_link": _drive_link,
    "phone_number": _phone_number,
    "methodology": _image,
    "result": _image,
    "cover_poster": _image,
    "pdf_poster": _pdf,
}


def validate_field(name: str, value: Any) -> Optional[str]:
    """
    Run the validator registered for name.
    
    Raises:
        KeyError: If name is not an upload field.
    """
    return FIELD_VALIDATORS[name](value)
